"""Jira REST API access."""

from .client import JiraAPIClient

__all__ = ["JiraAPIClient"]
