"""
Jira REST API client for the hierarchy resolvers.

Operations:
- search_issues: Search issues of one type matching typed field filters
- get_issue: Get a single issue by key
- get_field: Get a custom field definition
- get_field_options: Get the allowed options of a selection custom field

Each operation has an ``_async`` twin that runs the blocking request in a
worker thread so several requests can be in flight at once.
"""

import asyncio
import functools
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Sequence, TypeVar
import requests
from requests.auth import HTTPBasicAuth
from requests.utils import quote

from ..models.errors import RequestError, ValidationError
from ..models.query import FieldFilter, render_jql
from ..utils.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

T = TypeVar("T")

SEARCH_PAGE_SIZE = 50
OPTIONS_PAGE_SIZE = 100


class JiraAPIClient:
    """Jira REST API client with rate limiting and no retries."""

    def __init__(
        self,
        base_url: str,
        email: str,
        api_token: str,
        timeout: tuple[float, float] = (5, 30),
        max_workers: int = 8,
        rate_limiter: RateLimiter | None = None,
    ):
        """
        Initialize Jira client.

        Args:
            base_url: Jira base URL (e.g., https://company.atlassian.net)
            email: User email
            api_token: API token
            timeout: (connect, read) timeout in seconds for every request
            max_workers: Worker threads used by the async operations
            rate_limiter: Shared limiter, defaults to 10 req/s with a burst of 20
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.session.auth = HTTPBasicAuth(email, api_token)
        self.session.headers.update({
            "Accept": "application/json",
            "Content-Type": "application/json"
        })
        self._rate_limiter = rate_limiter or RateLimiter(requests_per_second=10.0, burst_size=20)
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="jira")

    def _request(self, method: str, path: str, action: str, **kwargs) -> Any:
        """
        Make a rate-limited request and decode its JSON body.

        Args:
            method: HTTP method
            path: API path below the base URL
            action: Human description used in error messages (e.g. "fetch issue")

        Raises:
            RequestError: On transport failure or non-success status
        """
        url = f"{self.base_url}{path}"
        kwargs.setdefault("timeout", self.timeout)

        self._rate_limiter.acquire()
        started = time.monotonic()

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.exceptions.RequestException as e:
            raise RequestError(f"Failed to {action}: {e}") from e

        duration_ms = int((time.monotonic() - started) * 1000)
        logger.debug(
            f"{method} {path} -> {response.status_code} ({duration_ms}ms)",
            extra={"duration_ms": duration_ms},
        )

        if not response.ok:
            raise RequestError(
                f"Failed to {action}: {response.status_code} - {response.reason}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise RequestError(
                f"Failed to {action}: invalid JSON response", status_code=response.status_code
            ) from e

    def search_issues(
        self,
        issue_type: str,
        filters: Sequence[FieldFilter],
        fields: Sequence[str] | None = None,
    ) -> list[dict]:
        """
        Search issues of a type matching every filter, following pagination.

        Pages are chained with ``nextPageToken`` until Jira reports ``isLast``.

        Args:
            issue_type: Issue type name (e.g. "Epic")
            filters: Conditions joined with AND
            fields: Issue fields to return (default: issue id only)
        """
        if not issue_type:
            raise ValidationError("Issue type is required.")
        if not filters:
            raise ValidationError("At least one filter is required.")

        jql = render_jql(issue_type, filters)
        payload: dict[str, Any] = {"jql": jql, "maxResults": SEARCH_PAGE_SIZE}
        if fields:
            payload["fields"] = list(fields)

        issues: list[dict] = []
        next_token: str | None = None
        while True:
            body = dict(payload, nextPageToken=next_token) if next_token else payload
            try:
                page = self._request("POST", "/rest/api/3/search/jql", "search issues", json=body)
            except RequestError:
                logger.error(f'Error performing issue search with JQL "{jql}"')
                raise

            issues.extend(page.get("issues", []))

            next_token = page.get("nextPageToken")
            if page.get("isLast", True) or not next_token:
                break

        logger.debug(f"Search returned {len(issues)} issues: {jql}")
        return issues

    def get_issue(self, issue_key: str, fields: Sequence[str] | None = None) -> dict:
        """Get issue by key."""
        if not issue_key:
            raise ValidationError("Issue key is required.")

        params = {"fields": ",".join(fields)} if fields else None
        try:
            return self._request(
                "GET",
                f"/rest/api/3/issue/{quote(issue_key, safe='')}",
                "fetch issue",
                params=params,
            )
        except RequestError:
            logger.error(f"Error fetching issue with key {issue_key}", extra={"issue_key": issue_key})
            raise

    def get_field(self, field_id: str) -> dict:
        """
        Get a custom field definition (name, schema, ...).

        Jira Cloud has no single-field read endpoint, so the definition is
        taken from the paginated field search filtered on this id.
        """
        if not field_id:
            raise ValidationError("Custom field ID is required.")

        page = self._request(
            "GET",
            "/rest/api/3/field/search",
            "fetch custom field details",
            params={"id": field_id},
        )
        for field in page.get("values", []):
            if field.get("id") == field_id:
                return field

        raise RequestError(f"Failed to fetch custom field details: field {field_id} not found")

    def get_field_options(self, field_id: str) -> list[dict]:
        """
        Get every option of a selection custom field, following pagination.

        The options endpoint takes the numeric id, so "customfield_10020"
        is addressed as "10020".
        """
        if not field_id:
            raise ValidationError("Custom field ID is required.")

        numeric_id = field_id.removeprefix("customfield_")
        options: list[dict] = []
        while True:
            page = self._request(
                "GET",
                f"/rest/api/3/customField/{numeric_id}/option",
                "fetch custom field values",
                params={"startAt": len(options), "maxResults": OPTIONS_PAGE_SIZE},
            )
            batch = page.get("values", [])
            options.extend(batch)

            if not batch or page.get("isLast", True):
                break

        return options

    # Async methods

    async def _run(self, func: Callable[..., T], *args, **kwargs) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self._executor,
            functools.partial(func, *args, **kwargs),
        )

    async def search_issues_async(
        self,
        issue_type: str,
        filters: Sequence[FieldFilter],
        fields: Sequence[str] | None = None,
    ) -> list[dict]:
        """Search issues asynchronously."""
        return await self._run(self.search_issues, issue_type, filters, fields)

    async def get_issue_async(self, issue_key: str, fields: Sequence[str] | None = None) -> dict:
        """Get issue asynchronously."""
        return await self._run(self.get_issue, issue_key, fields)

    async def get_field_async(self, field_id: str) -> dict:
        """Get custom field definition asynchronously."""
        return await self._run(self.get_field, field_id)

    async def get_field_options_async(self, field_id: str) -> list[dict]:
        """Get custom field options asynchronously."""
        return await self._run(self.get_field_options, field_id)

    def close(self) -> None:
        """Release the HTTP session and worker threads."""
        self._executor.shutdown(wait=False)
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
