"""Reusable processors and suggestion providers.

Handlers here are plain functions referenced by import path from
themecascade.yaml; they are not registered until configured.
"""

from themecascade.pipeline.processors.attributes import add_classes
from themecascade.pipeline.processors.suggestions import (
    add_suggestions,
    remove_suggestions,
    suggest_from_variable,
)
from themecascade.pipeline.processors.variables import append_content, set_variables

__all__ = [
    "add_classes",
    "set_variables",
    "append_content",
    "suggest_from_variable",
    "add_suggestions",
    "remove_suggestions",
]
