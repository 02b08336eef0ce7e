"""Shared types and naming helpers for the preprocess pipeline.

The variable tree is a plain mutable mapping: processors may add, remove or
rewrite any key, so no schema is imposed here.
"""

from __future__ import annotations

from collections.abc import Callable, MutableMapping, Sequence
from typing import Any

from themecascade.errors import InvalidHookNameError

# Type aliases
VariableTree = MutableMapping[str, Any]
SuggestionProvider = Callable[[VariableTree], "Sequence[str] | str | None"]
AlterCallback = Callable[[list[str], VariableTree, str], None]

GLOBAL_SUGGESTIONS_KEY = "suggestions"
SUGGESTIONS_PREFIX = "suggestions_for_"


def validate_hook_name(hook: object) -> str:
    """Ensure a hook name is a non-empty string.

    Args:
        hook: Candidate hook name

    Returns:
        The hook name, unchanged

    Raises:
        InvalidHookNameError: If the name is empty or not a string
    """
    if not isinstance(hook, str) or not hook:
        raise InvalidHookNameError(hook)
    return hook


def suggestions_key(hook: str) -> str:
    """Name suggestion providers and hook-specific alters are bound to."""
    return f"{SUGGESTIONS_PREFIX}{hook}"


def alter_keys(hook: str) -> list[str]:
    """Alter keys for a hook: the global key first, then the hook-specific one."""
    return [GLOBAL_SUGGESTIONS_KEY, suggestions_key(hook)]
