"""Suggestion resolution.

Computes the ordered list of more specific hook names for one invocation:

    providers("suggestions_for_<hook>")
      → module alters ("suggestions", "suggestions_for_<hook>")
      → theme alters  ("suggestions", "suggestions_for_<hook>")

The list is returned as the last alter left it: no deduplication and no
filtering against the registry.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from themecascade.pipeline.context import alter_keys, suggestions_key, validate_hook_name

if TYPE_CHECKING:
    from themecascade.pipeline.context import VariableTree
    from themecascade.pipeline.extensions import ModuleHandler, ThemeHandler
    from themecascade.pipeline.theme import ActiveTheme

logger = logging.getLogger(__name__)


class SuggestionResolver:
    """Resolves hook suggestions through providers and two alter stages.

    Attributes:
        module_handler: Providers and module-scope alter callbacks
        theme_handler: Theme-scope alter callbacks
        theme: Active theme whose ancestry orders theme alters
    """

    def __init__(
        self,
        module_handler: ModuleHandler,
        theme_handler: ThemeHandler,
        theme: ActiveTheme | None = None,
    ) -> None:
        self.module_handler = module_handler
        self.theme_handler = theme_handler
        self.theme = theme

    def get_suggestions(self, hook: str, variables: VariableTree) -> list[str]:
        """Get suggestions for a given hook.

        Provider and alter callback exceptions propagate to the caller.

        Args:
            hook: Base hook name
            variables: Variable tree handed to providers and alters

        Returns:
            Suggested hook names, in order

        Raises:
            InvalidHookNameError: If hook is empty or not a string
        """
        validate_hook_name(hook)

        suggestions = self.module_handler.invoke_all(suggestions_key(hook), variables)
        keys = alter_keys(hook)
        self.module_handler.alter(keys, suggestions, variables, hook)
        self.theme_handler.alter(keys, suggestions, variables, hook, self.theme)

        logger.debug("Suggestions for '%s': %s", hook, suggestions)
        return suggestions
