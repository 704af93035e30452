"""
Resolvers for PI planning data.

- SelectionValueResolver: allowed values of a selection field
- EpicResolver: epics of a PI / squad pair (cached)
- HierarchyResolver: Program / Project / Epic join (cached)
- PlanningService: application operations built on the resolvers
"""

from .selection_values import SelectionValueResolver, is_selection_schema
from .epics import EpicResolver
from .hierarchy import HierarchyResolver, join_hierarchy, distinct_project_keys
from .planning import PlanningService

__all__ = [
    "SelectionValueResolver",
    "is_selection_schema",
    "EpicResolver",
    "HierarchyResolver",
    "join_hierarchy",
    "distinct_project_keys",
    "PlanningService",
]
