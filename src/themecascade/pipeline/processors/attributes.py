"""Attribute processors.

Manipulate the conventional ``attributes`` sub-tree of a render variable tree.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from themecascade.pipeline.context import VariableTree

logger = logging.getLogger(__name__)


def add_classes(variables: VariableTree, params: dict[str, Any]) -> VariableTree:
    """Append CSS classes to ``variables["attributes"]["class"]``.

    Creates the attributes mapping and class list when missing. Classes
    already present are not added twice.

    Args:
        variables: Variable tree
        params: Must contain 'classes' (a class name or a list of them)

    Returns:
        Modified variable tree
    """
    classes = params.get("classes", [])
    if isinstance(classes, str):
        classes = [classes]
    if not classes:
        logger.warning("No classes configured for add_classes")
        return variables

    attributes = variables.setdefault("attributes", {})
    existing = attributes.setdefault("class", [])
    if isinstance(existing, str):
        existing = existing.split()
        attributes["class"] = existing

    for name in classes:
        if name not in existing:
            existing.append(name)

    return variables
