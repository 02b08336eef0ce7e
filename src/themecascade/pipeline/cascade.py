"""Cascade engine.

Applies the base hook's processors, then each registered suggestion's
processors, to one shared variable tree.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from themecascade.pipeline.context import validate_hook_name

if TYPE_CHECKING:
    from themecascade.pipeline.context import VariableTree
    from themecascade.pipeline.processor import ProcessorSpec
    from themecascade.pipeline.registry import ProcessorRegistry
    from themecascade.pipeline.suggestions import SuggestionResolver

logger = logging.getLogger(__name__)


class CascadeEngine:
    """Runs the preprocess cascade for one render session.

    The engine keeps no per-invocation state; concurrent calls are safe as
    long as each call gets its own variable tree.

    Attributes:
        resolver: Computes suggestions for a hook
        registry: Resolves hook names to ordered processors
    """

    def __init__(self, resolver: SuggestionResolver, registry: ProcessorRegistry) -> None:
        self.resolver = resolver
        self.registry = registry

    def get_suggestions(self, hook: str, variables: VariableTree) -> list[str]:
        """Get suggestions for a given hook (see SuggestionResolver)."""
        return self.resolver.get_suggestions(hook, variables)

    def preprocess(self, hook: str, variables: VariableTree) -> VariableTree:
        """Preprocess variables for a given hook.

        Suggestions are resolved before anything is applied. Mutations
        accumulate: each suggestion's processors see the output of the base
        hook's processors and of every earlier suggestion. A suggestion that
        appears twice is applied twice. Processor exceptions propagate and
        stop the cascade.

        Args:
            hook: Base hook name
            variables: Variable tree to transform

        Returns:
            The preprocessed variable tree

        Raises:
            InvalidHookNameError: If hook is empty or not a string
        """
        validate_hook_name(hook)

        suggestions = self.resolver.get_suggestions(hook, variables)
        variables = self._apply_hook(hook, variables)

        if not suggestions:
            return variables

        for suggestion in suggestions:
            if not self._has_processors(suggestion):
                logger.debug("Suggestion '%s' skipped (no processors)", suggestion)
                continue

            variables = self._apply_hook(suggestion, variables)

        return variables

    def _apply_hook(self, hook: str, variables: VariableTree) -> VariableTree:
        """Handle the preprocessing of a single hook.

        Args:
            hook: Hook or suggestion name
            variables: Variable tree to reduce through the hook's processors

        Returns:
            The processed variables
        """
        for spec in self._get_processors(hook):
            logger.debug("Applying processor '%s' for '%s'", spec.id, hook)
            variables = spec.apply(variables)
        return variables

    def _get_processors(self, hook: str) -> list[ProcessorSpec]:
        try:
            return self.registry.get_processors(hook)
        except LookupError:
            logger.debug("Registry lookup failed for '%s', treating as no processors", hook)
            return []

    def _has_processors(self, hook: str) -> bool:
        try:
            return self.registry.has_processors(hook)
        except LookupError:
            return False
