"""Program / Project (POL) / Epic data models."""

from dataclasses import dataclass
from typing import Optional
from pydantic import BaseModel, Field

from .errors import ValidationError

# Cache namespaces
EPICS_NAMESPACE = "epics"
PROJECTS_NAMESPACE = "projects"

CACHE_KEY_SEPARATOR = "::"


def cache_key(namespace: str, planning_period: str, squad: str) -> str:
    """Build the cache key for a namespace and filter pair, e.g. ``epics::PI 1 - 2024::Squad Analytics``."""
    return CACHE_KEY_SEPARATOR.join((namespace, planning_period, squad))


@dataclass(frozen=True)
class FilterPair:
    """PI Planning value and Squad Porteuse value selecting one slice of epics."""

    planning_period: str
    squad: str

    def __post_init__(self) -> None:
        if not self.planning_period or not self.squad:
            raise ValidationError("Both PI Planning and Squad values are required.")

    def cache_key(self, namespace: str) -> str:
        return cache_key(namespace, self.planning_period, self.squad)


class Epic(BaseModel):
    """Epic matching a filter pair, with the key of its parent project (if any)."""

    epic_key: str = Field(..., alias="EpicKey")
    project_key: Optional[str] = Field(None, alias="POLProjectKey")

    class Config:
        """Pydantic config."""
        populate_by_name = True
        frozen = True


class ProjectDetail(BaseModel):
    """Project (POL) issue with its parent program and descriptive attributes."""

    project_key: str = Field(..., alias="ProjectKey")
    program_key: Optional[str] = Field(None, alias="ProgramKey")
    summary: str = Field("", alias="Summary")
    id_pol: Optional[str] = Field(None, alias="IDPOL")
    nature: Optional[str] = Field(None, alias="Nature")

    class Config:
        """Pydantic config."""
        populate_by_name = True
        frozen = True


class HierarchyEntry(BaseModel):
    """
    One joined row of the hierarchy: one per epic.

    program_key is None when the project could not be resolved to a parent
    program, project_key is None when the epic has no parent at all.
    """

    program_key: Optional[str] = Field(None, alias="ProgramKey")
    project_key: Optional[str] = Field(None, alias="ProjectKey")
    epic_key: str = Field(..., alias="EpicKey")

    class Config:
        """Pydantic config."""
        populate_by_name = True
        frozen = True
