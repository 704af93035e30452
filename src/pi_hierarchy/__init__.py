"""PI planning hierarchy (Program → Project → Epic) aggregated from Jira."""

__version__ = "0.1.0"
