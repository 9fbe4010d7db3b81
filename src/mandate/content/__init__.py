"""Static content: catalog lookups and character generation."""

from .catalog import (
    ContentCatalog,
    get_catalog,
    get_archetypes,
    get_archetype,
    get_parties,
    get_party,
    get_issues,
    get_proposals,
    get_proposal,
    get_action,
    get_available_actions,
)
from .generator import generate_character

__all__ = [
    "ContentCatalog",
    "get_catalog",
    "get_archetypes",
    "get_archetype",
    "get_parties",
    "get_party",
    "get_issues",
    "get_proposals",
    "get_proposal",
    "get_action",
    "get_available_actions",
    "generate_character",
]
