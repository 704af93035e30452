"""Fake Jira client and payload builders used by the unit tests."""

import asyncio

from pi_hierarchy.models.errors import RequestError


class FakeJiraClient:
    """Records every call and serves canned Jira payloads."""

    def __init__(
        self,
        epics: list[dict] | None = None,
        projects: dict[str, dict] | None = None,
        field_defs: dict[str, dict] | None = None,
        options: dict[str, list[dict]] | None = None,
        failing_issues: tuple[str, ...] = (),
        search_error: Exception | None = None,
    ):
        self.epics = epics or []
        self.projects = projects or {}
        self.field_defs = field_defs or {}
        self.options = options or {}
        self.failing_issues = set(failing_issues)
        self.search_error = search_error

        self.search_calls: list[tuple[str, list]] = []
        self.issue_calls: list[str] = []
        self.field_calls: list[str] = []
        self.option_calls: list[str] = []

    @property
    def call_count(self) -> int:
        return (
            len(self.search_calls)
            + len(self.issue_calls)
            + len(self.field_calls)
            + len(self.option_calls)
        )

    async def search_issues_async(self, issue_type, filters, fields=None):
        self.search_calls.append((issue_type, list(filters)))
        if self.search_error:
            raise self.search_error
        return self.epics

    async def get_issue_async(self, issue_key, fields=None):
        self.issue_calls.append(issue_key)
        await asyncio.sleep(0)
        if issue_key in self.failing_issues:
            raise RequestError("Failed to fetch issue: 404 - Not Found", status_code=404)
        return self.projects[issue_key]

    async def get_field_async(self, field_id):
        self.field_calls.append(field_id)
        if field_id not in self.field_defs:
            raise RequestError("Failed to fetch custom field details: 404 - Not Found", status_code=404)
        return self.field_defs[field_id]

    async def get_field_options_async(self, field_id):
        self.option_calls.append(field_id)
        return self.options.get(field_id, [])


def epic_issue(key: str, parent_key: str | None = None) -> dict:
    """Search result for an epic, optionally with a parent project."""
    parent = {"key": parent_key} if parent_key else None
    return {"key": key, "fields": {"parent": parent}}


def project_issue(
    program_key: str | None,
    summary: str = "Project",
    id_pol: object = None,
    nature: object = None,
) -> dict:
    """Issue record for a project (POL)."""
    return {
        "fields": {
            "parent": {"key": program_key} if program_key else None,
            "summary": summary,
            "idPOLfield": id_pol,
            "naturefield": nature,
        }
    }
