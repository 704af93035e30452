"""Selection Value Resolver: allowed values of a selection custom field."""

import logging

from ..jira.client import JiraAPIClient
from ..models.errors import ValidationError

logger = logging.getLogger(__name__)

# Schema types of single- and multi-select fields
SELECTION_SCHEMA_TYPES = frozenset({"single-select", "multi-select", "option"})


def is_selection_schema(schema: dict | None) -> bool:
    """Check whether a field schema describes a single- or multi-select field."""
    if not schema:
        return False
    schema_type = schema.get("type")
    if schema_type in SELECTION_SCHEMA_TYPES:
        return True
    return schema_type == "array" and schema.get("items") == "option"


class SelectionValueResolver:
    """Lists the legal values of a selection custom field."""

    def __init__(self, jira_client: JiraAPIClient):
        self.jira_client = jira_client

    async def resolve(self, field_id: str) -> list[str]:
        """
        Get the ordered option values of a custom field.

        Args:
            field_id: Custom field id (e.g. customfield_10020)

        Returns:
            Option values in Jira's order, or an empty list when the field
            is not a selection field

        Raises:
            ValidationError: If field_id is empty
            RequestError: If the definition or options lookup fails
        """
        if not field_id:
            raise ValidationError("Custom field ID is required.")

        field_data = await self.jira_client.get_field_async(field_id)

        if not is_selection_schema(field_data.get("schema")):
            logger.warning(
                f"Custom field {field_id} is not a selection type. Returning empty list.",
                extra={"field_id": field_id},
            )
            return []

        options = await self.jira_client.get_field_options_async(field_id)
        return [option["value"] for option in options if "value" in option]
