"""Generic variable processors."""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from themecascade.pipeline.context import VariableTree


def set_variables(variables: VariableTree, params: dict[str, Any]) -> VariableTree:
    """Set top-level keys from ``params["values"]``.

    With ``overwrite: false`` only keys missing from the tree are set.
    Values are deep-copied so configured defaults are never shared between
    renders.
    """
    overwrite = params.get("overwrite", True)
    for key, value in params.get("values", {}).items():
        if overwrite or key not in variables:
            variables[key] = copy.deepcopy(value)
    return variables


def append_content(variables: VariableTree, params: dict[str, Any]) -> VariableTree:
    """Append ``params["item"]`` to the ``content`` list, creating it if needed."""
    content = variables.setdefault("content", [])
    content.append(copy.deepcopy(params.get("item")))
    return variables
