"""Data models for the PI hierarchy and its errors."""

from .errors import (
    HierarchyError,
    ValidationError,
    ConfigurationError,
    RequestError,
)
from .hierarchy import (
    EPICS_NAMESPACE,
    PROJECTS_NAMESPACE,
    cache_key,
    FilterPair,
    Epic,
    ProjectDetail,
    HierarchyEntry,
)
from .query import FieldFilter, render_jql

__all__ = [
    # Errors
    "HierarchyError",
    "ValidationError",
    "ConfigurationError",
    "RequestError",
    # Hierarchy models
    "EPICS_NAMESPACE",
    "PROJECTS_NAMESPACE",
    "cache_key",
    "FilterPair",
    "Epic",
    "ProjectDetail",
    "HierarchyEntry",
    # Query models
    "FieldFilter",
    "render_jql",
]
