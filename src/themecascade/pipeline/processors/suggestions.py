"""Suggestion providers."""

from __future__ import annotations

from collections.abc import Sized
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from themecascade.pipeline.context import VariableTree


def suggest_from_variable(variables: VariableTree, *, base: str, key: str) -> list[str]:
    """Suggest ``"<base>__<value>"`` from a variable.

    Bound with params from config, e.g. ``base: node, key: bundle`` turns a
    tree with ``bundle: article`` into ``["node__article"]``.

    Args:
        variables: Variable tree
        base: Hook name to specialize
        key: Top-level variable holding the specialization

    Returns:
        A single suggestion, or an empty list if the variable is missing or empty
    """
    value = variables.get(key)
    if value is None or (isinstance(value, Sized) and not value):
        return []
    return [f"{base}__{value}"]


def add_suggestions(
    suggestions: list[str],
    variables: VariableTree,
    hook: str,
    *,
    names: list[str],
    prepend: bool = False,
) -> None:
    """Alter callback adding fixed suggestions, at the end or the front.

    Names already in the list are added again; the cascade applies a name
    once per occurrence.
    """
    if prepend:
        suggestions[:0] = names
    else:
        suggestions.extend(names)


def remove_suggestions(
    suggestions: list[str],
    variables: VariableTree,
    hook: str,
    *,
    names: list[str],
) -> None:
    """Alter callback removing every occurrence of the given suggestions."""
    suggestions[:] = [s for s in suggestions if s not in names]
