"""Suggestion providers and alter callbacks contributed by extensions.

Two dispatchers mirror the two extension scopes:

- ModuleHandler: suggestion providers and module-scope alter callbacks,
  run in module registration order
- ThemeHandler: theme-scope alter callbacks, run in active theme ancestry
  order (most general base theme first, active theme last)
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from themecascade.pipeline.context import AlterCallback, SuggestionProvider, VariableTree
    from themecascade.pipeline.theme import ActiveTheme

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Registration:
    """A callback together with the extension that contributed it."""

    extension: str
    callback: object


class ModuleHandler:
    """Dispatches module-provided suggestion providers and alter callbacks."""

    def __init__(self, modules: Sequence[str] | None = None) -> None:
        """Initialize with an optional module order.

        Args:
            modules: Module names in the order their callbacks run. Modules
                first seen at registration time are appended.
        """
        self._modules: list[str] = []
        self._providers: dict[str, list[_Registration]] = defaultdict(list)
        self._alters: dict[str, list[_Registration]] = defaultdict(list)
        for module in modules or []:
            self.add_module(module)

    @property
    def modules(self) -> list[str]:
        return list(self._modules)

    def add_module(self, module: str) -> None:
        """Append a module to the invocation order (no-op if already known)."""
        if module not in self._modules:
            self._modules.append(module)

    def register_provider(self, name: str, provider: SuggestionProvider, module: str) -> None:
        """Bind a suggestion provider to a name like "suggestions_for_node"."""
        self.add_module(module)
        self._providers[name].append(_Registration(module, provider))

    def register_alter(self, key: str, callback: AlterCallback, module: str) -> None:
        """Bind an alter callback to "suggestions" or "suggestions_for_<hook>"."""
        self.add_module(module)
        self._alters[key].append(_Registration(module, callback))

    def invoke_all(self, name: str, variables: VariableTree) -> list[str]:
        """Invoke every provider bound to a name and collect their suggestions.

        Sequences are concatenated, a single string is appended and None
        contributes nothing.

        Args:
            name: Provider name
            variables: Variable tree passed to each provider

        Returns:
            Suggestions in provider invocation order
        """
        collected: list[str] = []
        for registration in self._ordered(self._providers.get(name, [])):
            result = registration.callback(variables)  # type: ignore[operator]
            if result is None:
                continue
            if isinstance(result, str):
                collected.append(result)
            else:
                collected.extend(result)
        return collected

    def alter(
        self,
        keys: Sequence[str],
        suggestions: list[str],
        variables: VariableTree,
        hook: str,
    ) -> None:
        """Run module alter callbacks, key by key, against a suggestion list.

        Args:
            keys: Alter keys in order
            suggestions: List mutated in place
            variables: Variable tree
            hook: Base hook name
        """
        for key in keys:
            for registration in self._ordered(self._alters.get(key, [])):
                logger.debug("Module '%s' altering '%s'", registration.extension, key)
                registration.callback(suggestions, variables, hook)  # type: ignore[operator]

    def _ordered(self, registrations: list[_Registration]) -> list[_Registration]:
        # Stable sort keeps registration order within one module
        return sorted(registrations, key=lambda r: self._modules.index(r.extension))


class ThemeHandler:
    """Dispatches theme-provided alter callbacks for the active theme."""

    def __init__(self) -> None:
        self._alters: dict[str, list[_Registration]] = defaultdict(list)

    def register_alter(self, key: str, callback: AlterCallback, theme: str) -> None:
        """Bind an alter callback owned by a theme."""
        self._alters[key].append(_Registration(theme, callback))

    def alter(
        self,
        keys: Sequence[str],
        suggestions: list[str],
        variables: VariableTree,
        hook: str,
        theme: ActiveTheme | None,
    ) -> None:
        """Run theme alter callbacks in ancestry order.

        Callbacks from themes outside the active ancestry are ignored. With
        no active theme nothing runs.

        Args:
            keys: Alter keys in order
            suggestions: List mutated in place
            variables: Variable tree
            hook: Base hook name
            theme: Active theme
        """
        if theme is None:
            return

        for key in keys:
            eligible = [
                (position, registration)
                for registration in self._alters.get(key, [])
                if (position := theme.position(registration.extension)) is not None
            ]
            eligible.sort(key=lambda item: item[0])
            for _, registration in eligible:
                logger.debug("Theme '%s' altering '%s'", registration.extension, key)
                registration.callback(suggestions, variables, hook)  # type: ignore[operator]
