"""
Hierarchy Resolver: Program → Project (POL) → Epic join.

Steps:
1. Epics of the filter pair (EpicResolver, own cache)
2. Distinct parent project keys
3. Concurrent fetch of every project, reading its parent program
4. Join epics back to their project/program pair

The joined list is cached forever under ``projects::<pi>::<squad>``.
"""

import asyncio
import logging
from typing import Any, Optional

from ..cache.store import CacheStore
from ..config.fields import FieldDirectory, ID_POL, NATURE
from ..jira.client import JiraAPIClient
from ..models.errors import HierarchyError
from ..models.hierarchy import (
    PROJECTS_NAMESPACE,
    Epic,
    FilterPair,
    HierarchyEntry,
    ProjectDetail,
)
from .epics import EpicResolver

logger = logging.getLogger(__name__)


def field_text(value: Any) -> Optional[str]:
    """Flatten a custom field value (text, option or list of options) to a string."""
    if not value:
        return None
    if isinstance(value, dict):
        return value.get("value") or value.get("name") or None
    if isinstance(value, list):
        parts = [field_text(item) for item in value]
        return ", ".join(p for p in parts if p) or None
    return str(value)


def distinct_project_keys(epics: list[Epic]) -> list[str]:
    """Non-null project keys, each once."""
    return list(dict.fromkeys(epic.project_key for epic in epics if epic.project_key))


def join_hierarchy(epics: list[Epic], projects: list[ProjectDetail]) -> list[HierarchyEntry]:
    """Build one entry per epic; unresolved projects yield a null program."""
    by_key = {project.project_key: project for project in projects}

    entries = []
    for epic in epics:
        project = by_key.get(epic.project_key) if epic.project_key else None
        entries.append(HierarchyEntry(
            program_key=project.program_key if project else None,
            project_key=epic.project_key,
            epic_key=epic.epic_key,
        ))
    return entries


class HierarchyResolver:
    """Resolves the full Program / Project / Epic hierarchy of a filter pair."""

    def __init__(
        self,
        jira_client: JiraAPIClient,
        cache: CacheStore,
        fields: FieldDirectory,
        epic_resolver: EpicResolver | None = None,
    ):
        self.jira_client = jira_client
        self.cache = cache
        self.fields = fields
        self.epic_resolver = epic_resolver or EpicResolver(jira_client, cache, fields)

    async def fetch_project(self, project_key: str) -> ProjectDetail:
        """Fetch a project issue and read its program, summary, ID POL and Nature."""
        id_pol_field = self.fields.field_id(ID_POL)
        nature_field = self.fields.field_id(NATURE)

        project_data = await self.jira_client.get_issue_async(
            project_key, fields=["parent", "summary", id_pol_field, nature_field]
        )
        fields = project_data.get("fields") or {}
        parent = fields.get("parent") or {}

        return ProjectDetail(
            project_key=project_key,
            program_key=parent.get("key") or None,
            summary=fields.get("summary") or "",
            id_pol=field_text(fields.get(id_pol_field)),
            nature=field_text(fields.get(nature_field)),
        )

    async def resolve(self, planning_period: str, squad: str) -> list[HierarchyEntry]:
        """
        Get the hierarchy entries for a PI Planning value and a Squad Porteuse value.

        A failed project fetch fails the whole resolution; nothing is cached then.

        Raises:
            ValidationError: If either value is empty
            ConfigurationError: If a field is missing from the Field Directory
            RequestError: If the epic search or any project fetch fails
        """
        pair = FilterPair(planning_period, squad)
        key = pair.cache_key(PROJECTS_NAMESPACE)
        log_extra = {"cache_key": key, "planning_period": planning_period, "squad": squad}

        cached = self.cache.get(key)
        if cached is not None:
            logger.info(f"Cache hit for key: {key}", extra=log_extra)
            return [HierarchyEntry.model_validate(item) for item in cached]

        try:
            epics = await self.epic_resolver.resolve(planning_period, squad)
            project_keys = distinct_project_keys(epics)
            logger.debug(f"Fetching {len(project_keys)} projects for {len(epics)} epics", extra=log_extra)

            projects = await asyncio.gather(
                *(self.fetch_project(project_key) for project_key in project_keys)
            )
        except HierarchyError as e:
            logger.error(f"Error fetching Squad Increment Hierarchy: {e}", extra=log_extra)
            raise

        entries = join_hierarchy(epics, list(projects))

        self.cache.set(key, [entry.model_dump(by_alias=True) for entry in entries])
        logger.info(f"Cache updated for key: {key}", extra=log_extra)

        return entries
