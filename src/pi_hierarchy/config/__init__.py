"""Field Directory and runtime settings."""

from .fields import (
    DEFAULT_FIELDS_PATH,
    PI_PLANNING,
    SQUAD_PORTEUSE,
    ID_POL,
    NATURE,
    FieldDefinition,
    FieldDirectory,
    load_field_directory,
)
from .settings import Settings, load_settings

__all__ = [
    "DEFAULT_FIELDS_PATH",
    "PI_PLANNING",
    "SQUAD_PORTEUSE",
    "ID_POL",
    "NATURE",
    "FieldDefinition",
    "FieldDirectory",
    "load_field_directory",
    "Settings",
    "load_settings",
]
