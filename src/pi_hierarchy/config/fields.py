"""Field Directory: lookup of platform custom field ids by human-readable name."""

import yaml
from pathlib import Path
from typing import Optional
from pydantic import BaseModel

from ..models.errors import ConfigurationError
from ..models.query import FieldFilter

DEFAULT_FIELDS_PATH = Path(__file__).parent / "fields.yaml"

PI_PLANNING = "PI Planning"
SQUAD_PORTEUSE = "Squad Porteuse"
ID_POL = "ID POL"
NATURE = "Nature"


class FieldDefinition(BaseModel):
    """Custom field id plus the clause suffix used when filtering on it."""

    id: str
    clause_type: Optional[str] = None


class FieldDirectoryConfig(BaseModel):
    """Field Directory configuration model."""

    fields: dict[str, FieldDefinition]


class FieldDirectory:
    """Read-only mapping from field name (e.g. "PI Planning") to its definition."""

    def __init__(self, fields: dict[str, FieldDefinition]):
        self._fields = dict(fields)

    def definition(self, name: str) -> FieldDefinition:
        definition = self._fields.get(name)
        if definition is None or not definition.id:
            raise ConfigurationError(f"Custom field '{name}' is not defined.")
        return definition

    def field_id(self, name: str) -> str:
        return self.definition(name).id

    def equals(self, name: str, value: str) -> FieldFilter:
        """Build an equality filter on the named field."""
        definition = self.definition(name)
        return FieldFilter(
            field=definition.id,
            operator="=",
            value=value,
            clause_type=definition.clause_type,
        )

    def __contains__(self, name: str) -> bool:
        return name in self._fields


def load_field_directory(config_path: str | Path = DEFAULT_FIELDS_PATH) -> FieldDirectory:
    """
    Load the Field Directory from a YAML file.

    Args:
        config_path: Path to the fields file

    Returns:
        Loaded Field Directory

    Raises:
        FileNotFoundError: If the fields file is not found
        yaml.YAMLError: If the fields file is invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Fields file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config_data = yaml.safe_load(f)

    return FieldDirectory(FieldDirectoryConfig(**config_data).fields)
