"""Application operations consumed by the presentation layer."""

import logging

from ..cache.store import CacheStore, InMemoryCacheStore, JsonFileCacheStore
from ..config.fields import (
    DEFAULT_FIELDS_PATH,
    PI_PLANNING,
    SQUAD_PORTEUSE,
    FieldDirectory,
    load_field_directory,
)
from ..config.settings import Settings
from ..jira.client import JiraAPIClient
from ..models.errors import HierarchyError
from ..models.hierarchy import Epic, HierarchyEntry
from .epics import EpicResolver
from .hierarchy import HierarchyResolver
from .selection_values import SelectionValueResolver

logger = logging.getLogger(__name__)


class PlanningService:
    """Entry point for PI planning data: filter values, epics and hierarchy."""

    def __init__(self, jira_client: JiraAPIClient, cache: CacheStore, fields: FieldDirectory):
        self.jira_client = jira_client
        self.fields = fields
        self.selection_values = SelectionValueResolver(jira_client)
        self.epics = EpicResolver(jira_client, cache, fields)
        self.hierarchy = HierarchyResolver(jira_client, cache, fields, epic_resolver=self.epics)

    @classmethod
    def from_settings(cls, settings: Settings) -> "PlanningService":
        """Wire the Jira client, cache store and Field Directory from settings."""
        jira_client = JiraAPIClient(
            settings.jira_url, settings.jira_email, settings.jira_api_token
        )
        if settings.cache_file:
            cache: CacheStore = JsonFileCacheStore(settings.cache_file)
        else:
            cache = InMemoryCacheStore()
        fields = load_field_directory(settings.fields_file or DEFAULT_FIELDS_PATH)
        return cls(jira_client, cache, fields)

    async def _field_values(self, field_name: str, label: str) -> list[str]:
        try:
            return await self.selection_values.resolve(self.fields.field_id(field_name))
        except HierarchyError as e:
            logger.error(f"Error fetching {label} values: {e}")
            raise

    async def fetch_program_increments(self) -> list[str]:
        """List the PI Planning values."""
        return await self._field_values(PI_PLANNING, "Program Increments")

    async def fetch_program_squads(self) -> list[str]:
        """List the Squad Porteuse values."""
        return await self._field_values(SQUAD_PORTEUSE, "Program Squads")

    async def fetch_squad_increment_epics(self, planning_period: str, squad: str) -> list[Epic]:
        return await self.epics.resolve(planning_period, squad)

    async def fetch_squad_increment_hierarchy(
        self, planning_period: str, squad: str
    ) -> list[HierarchyEntry]:
        return await self.hierarchy.resolve(planning_period, squad)

    def close(self) -> None:
        self.jira_client.close()
