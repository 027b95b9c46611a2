"""Persistencia del visor en archivos `.orbm`.

Este módulo serializa y deserializa la notación, el grafo generado y las
preferencias de visualización para reconstruir la escena al abrir un
archivo.
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from core.model import BondType, DisplayMode, MolGraph, MolGraphBuilder, ViewSettings

logger = logging.getLogger(__name__)

APPLICATION_NAME = "Orbimol"


@dataclass
class ViewerDocument:
    """Contenido de un archivo `.orbm`."""
    notation: str
    graph: MolGraph
    settings: ViewSettings
    seed: Optional[int] = None


class PersistenceManager:
    """Gestiona el guardado y carga de archivos `.orbm` de Orbimol."""

    VERSION = "0.1.0"

    @staticmethod
    def save_to_dict(document: ViewerDocument) -> Dict[str, Any]:
        """Serializa un documento del visor en un diccionario.

        Args:
            document: Notación, grafo y preferencias activas.

        Returns:
            Diccionario serializable con modelo y preferencias.

        Side Effects:
            No tiene efectos laterales; solo lee el documento.
        """
        graph = document.graph

        # 1. Serializar MolGraph (átomos y enlaces)
        atoms_data = []
        for atom in graph.atoms:
            atoms_data.append({
                "element": atom.element,
                "position": list(atom.position),
                "charge": atom.charge,
            })

        bonds_data = []
        for bond in graph.bonds:
            bonds_data.append({
                "a1": bond.a1_idx,
                "a2": bond.a2_idx,
                "type": int(bond.bond_type),
            })

        # 2. Preferencias de visualización
        settings = document.settings
        settings_data = {
            "display_mode": settings.display_mode.value,
            "show_charges": settings.show_charges,
            "show_labels": settings.show_labels,
            "auto_rotate": settings.auto_rotate,
            "zoom": settings.zoom,
        }

        # 3. Combinar todo en un único documento
        return {
            "application": APPLICATION_NAME,
            "version": PersistenceManager.VERSION,
            "notation": document.notation,
            "seed": document.seed,
            "settings": settings_data,
            "model": {
                "atoms": atoms_data,
                "bonds": bonds_data,
            },
        }

    @staticmethod
    def load_from_dict(data: Dict[str, Any]) -> ViewerDocument:
        """Restaura un documento del visor desde un diccionario.

        Args:
            data: Diccionario de estado (resultado de `save_to_dict`).

        Returns:
            Documento con el grafo reconstruido y validado.

        Raises:
            ValueError: Si el archivo no corresponde a Orbimol o algún
                índice no es un entero.
            GraphConsistencyError: Si algún enlace apunta a un átomo inexistente.
        """
        if data.get("application") != APPLICATION_NAME:
            raise ValueError("Not a valid Orbimol file")

        # 1. Restaurar MolGraph
        builder = MolGraphBuilder()
        model_data = data.get("model", {})
        for atom_d in model_data.get("atoms", []):
            builder.add_atom(
                atom_d["element"],
                tuple(atom_d["position"]),
                charge=None if atom_d.get("charge") is None else int(atom_d["charge"]),
            )
        for bond_d in model_data.get("bonds", []):
            builder.add_bond(
                int(bond_d["a1"]),
                int(bond_d["a2"]),
                BondType(int(bond_d.get("type", 1))),
            )
        graph = builder.build()

        # 2. Restaurar preferencias
        settings_d = data.get("settings", {})
        settings = ViewSettings(
            display_mode=DisplayMode(settings_d.get("display_mode", DisplayMode.BALL_AND_STICK.value)),
            show_charges=settings_d.get("show_charges", True),
            show_labels=settings_d.get("show_labels", True),
            auto_rotate=settings_d.get("auto_rotate", False),
            zoom=settings_d.get("zoom", 1.0),
        )

        return ViewerDocument(
            notation=data.get("notation", ""),
            graph=graph,
            settings=settings,
            seed=data.get("seed"),
        )

    @staticmethod
    def save_to_file(filepath: str, document: ViewerDocument) -> None:
        """Guarda el documento en un archivo `.orbm`.

        Side Effects:
            Escribe en disco el archivo indicado.
        """
        data = PersistenceManager.save_to_dict(document)
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
        logger.info("Documento guardado en %s", filepath)

    @staticmethod
    def load_from_file(filepath: str) -> ViewerDocument:
        """Carga un archivo `.orbm`.

        Side Effects:
            Lee desde disco.
        """
        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)
        document = PersistenceManager.load_from_dict(data)
        logger.info("Documento cargado desde %s", filepath)
        return document
