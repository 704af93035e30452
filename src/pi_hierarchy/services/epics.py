"""Epic Resolver: epics of a PI Planning / Squad Porteuse pair."""

import logging

from ..cache.store import CacheStore
from ..config.fields import FieldDirectory, PI_PLANNING, SQUAD_PORTEUSE
from ..jira.client import JiraAPIClient
from ..models.errors import HierarchyError
from ..models.hierarchy import EPICS_NAMESPACE, Epic, FilterPair

logger = logging.getLogger(__name__)

EPIC_ISSUE_TYPE = "Epic"


def _to_epic(issue: dict) -> Epic:
    parent = (issue.get("fields") or {}).get("parent") or {}
    return Epic(epic_key=issue["key"], project_key=parent.get("key") or None)


class EpicResolver:
    """
    Resolves the epics matching a filter pair, cache first.

    Results are cached forever under ``epics::<pi>::<squad>``; the entry is
    only refreshed when the backing store no longer holds it.
    """

    def __init__(self, jira_client: JiraAPIClient, cache: CacheStore, fields: FieldDirectory):
        self.jira_client = jira_client
        self.cache = cache
        self.fields = fields

    async def resolve(self, planning_period: str, squad: str) -> list[Epic]:
        """
        Get the epics for a PI Planning value and a Squad Porteuse value.

        Raises:
            ValidationError: If either value is empty
            ConfigurationError: If a filter field is missing from the Field Directory
            RequestError: If the Jira search fails
        """
        pair = FilterPair(planning_period, squad)
        key = pair.cache_key(EPICS_NAMESPACE)
        log_extra = {"cache_key": key, "planning_period": planning_period, "squad": squad}

        cached = self.cache.get(key)
        if cached is not None:
            logger.info(f"Cache hit for key: {key}", extra=log_extra)
            return [Epic.model_validate(item) for item in cached]

        filters = [
            self.fields.equals(PI_PLANNING, planning_period),
            self.fields.equals(SQUAD_PORTEUSE, squad),
        ]

        try:
            issues = await self.jira_client.search_issues_async(
                EPIC_ISSUE_TYPE, filters, fields=["parent"]
            )
        except HierarchyError as e:
            logger.error(f"Error fetching Squad Increment Epics: {e}", extra=log_extra)
            raise

        epics = [_to_epic(issue) for issue in issues]

        self.cache.set(key, [epic.model_dump(by_alias=True) for epic in epics])
        logger.info(f"Cache updated for key: {key}", extra=log_extra)

        return epics
