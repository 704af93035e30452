"""Shared fixtures: in-memory cache and Field Directory."""

import pytest

from pi_hierarchy.cache.store import InMemoryCacheStore
from pi_hierarchy.config.fields import FieldDefinition, FieldDirectory


@pytest.fixture
def field_directory() -> FieldDirectory:
    return FieldDirectory({
        "PI Planning": FieldDefinition(id="cf_pi", clause_type="Select List (multiple choices)"),
        "Squad Porteuse": FieldDefinition(id="cf_squad", clause_type="Dropdown"),
        "ID POL": FieldDefinition(id="idPOLfield"),
        "Nature": FieldDefinition(id="naturefield"),
    })


@pytest.fixture
def cache() -> InMemoryCacheStore:
    return InMemoryCacheStore()
