"""Excepciones específicas del núcleo molecular de Orbimol."""


class OrbimolError(Exception):
    """Clase base para los errores propios de Orbimol."""


class GraphConsistencyError(OrbimolError):
    """Se lanza cuando un enlace referencia átomos inexistentes del grafo."""
