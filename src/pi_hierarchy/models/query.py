"""
Typed issue filters.

Filters stay structured until the Jira client renders them to JQL, so field
ids and user-supplied values are never concatenated by hand elsewhere.
"""

from typing import Literal, Optional, Sequence
from pydantic import BaseModel, Field


class FieldFilter(BaseModel):
    """Single ``<field> <operator> <value>`` condition."""

    field: str
    operator: Literal["=", "!=", "~"] = "="
    value: str
    clause_type: Optional[str] = Field(
        None, description="Custom field clause suffix, e.g. 'Dropdown'"
    )

    def render(self) -> str:
        """Render the condition as a JQL clause."""
        field_ref = self.field
        if self.clause_type:
            field_ref = f"{field_ref}[{self.clause_type}]"
        return f"{quote_jql(field_ref)} {self.operator} {quote_jql(self.value)}"


def quote_jql(value: str) -> str:
    """Wrap a value in double quotes, escaping backslashes and quotes."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def render_jql(issue_type: str, filters: Sequence[FieldFilter]) -> str:
    """Build ``issuetype = "<type>" AND <filter> AND ...``."""
    clauses = [f"issuetype = {quote_jql(issue_type)}"]
    clauses.extend(f.render() for f in filters)
    return " AND ".join(clauses)
