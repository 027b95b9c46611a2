from __future__ import annotations

import logging
from typing import Dict

from core.model import BondType, MolGraph

try:
    from rdkit import Chem
    from rdkit import RDLogger
    from rdkit.Geometry import Point3D
except Exception:  # pragma: no cover - optional dependency at runtime
    Chem = None
    RDLogger = None
    Point3D = None

logger = logging.getLogger(__name__)


def _require_rdkit():
    if Chem is None:
        raise RuntimeError("RDKit no disponible")


def rdkit_available() -> bool:
    return Chem is not None


def _ensure_ring_info(mol) -> None:
    if hasattr(Chem, "FastFindRings"):
        Chem.FastFindRings(mol)
    else:
        Chem.GetSymmSSSR(mol)


_BOND_TYPES = {
    BondType.SINGLE: "SINGLE",
    BondType.DOUBLE: "DOUBLE",
    BondType.TRIPLE: "TRIPLE",
    BondType.AROMATIC: "AROMATIC",
}


def molgraph_to_rdkit_with_map(molgraph: MolGraph):
    """Convierte el grafo en un Mol de RDKit sin sanitizar.

    El grafo de marcador no respeta valencias, así que no se sanitiza: los
    hidrógenos implícitos se calculan sin modo estricto y se conservan las
    posiciones 3D como conformador.
    """
    _require_rdkit()
    rw = Chem.RWMol()
    id_map: Dict[int, int] = {}

    for atom_idx, atom in enumerate(molgraph.atoms):
        rd_atom = Chem.Atom(atom.element)
        rd_atom.SetFormalCharge(atom.effective_charge)
        id_map[atom_idx] = rw.AddAtom(rd_atom)

    for bond in molgraph.bonds:
        begin = id_map[bond.a1_idx]
        end = id_map[bond.a2_idx]
        if bond.bond_type == BondType.AROMATIC:
            rw.GetAtomWithIdx(begin).SetIsAromatic(True)
            rw.GetAtomWithIdx(end).SetIsAromatic(True)
        bond_type = getattr(Chem.BondType, _BOND_TYPES[bond.bond_type])

        # Robust check: don't add bond if it already exists in RDKit mol
        if rw.GetBondBetweenAtoms(begin, end) is None:
            rw.AddBond(begin, end, bond_type)
            if bond.bond_type == BondType.AROMATIC:
                rw.GetBondBetweenAtoms(begin, end).SetIsAromatic(True)

    mol = rw.GetMol()
    mol.UpdatePropertyCache(strict=False)
    _ensure_ring_info(mol)
    conf = Chem.Conformer(mol.GetNumAtoms())
    conf.Set3D(True)
    for atom_idx, rd_idx in id_map.items():
        conf.SetAtomPosition(rd_idx, Point3D(*molgraph.atoms[atom_idx].position))
    mol.AddConformer(conf, assignId=True)
    return mol, id_map


def molgraph_to_rdkit(molgraph: MolGraph):
    mol, _ = molgraph_to_rdkit_with_map(molgraph)
    return mol


def molgraph_to_smiles(molgraph: MolGraph) -> str:
    mol = molgraph_to_rdkit(molgraph)
    return Chem.MolToSmiles(mol, canonical=True)


def molgraph_to_molfile(molgraph: MolGraph) -> str:
    mol = molgraph_to_rdkit(molgraph)
    block = Chem.MolToMolBlock(mol, kekulize=False)
    logger.debug("MolBlock con %d átomos generado", mol.GetNumAtoms())
    return block


def is_parsable_smiles(notation: str) -> bool:
    """Indica si RDKit acepta la notación como SMILES.

    Es solo informativo: el grafo de marcador se genera igualmente.
    """
    _require_rdkit()
    if not notation:
        return False
    RDLogger.DisableLog("rdApp.*")
    try:
        mol = Chem.MolFromSmiles(notation)
    finally:
        RDLogger.EnableLog("rdApp.*")
    return mol is not None
