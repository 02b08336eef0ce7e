"""Processor registry.

ExtensionRegistry holds every registered processor. The cascade only sees a
ThemeScopedRegistry, a view of that registry filtered for one active theme:

- Module processors are always eligible
- Theme processors are eligible only if their provider is the active theme
  or one of its base themes
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from themecascade.errors import DuplicateProcessorError

if TYPE_CHECKING:
    from themecascade.pipeline.processor import ProcessorSpec
    from themecascade.pipeline.theme import ActiveTheme

logger = logging.getLogger(__name__)


@runtime_checkable
class ProcessorRegistry(Protocol):
    """Lookup interface consumed by the cascade engine."""

    def get_processors(self, hook: str) -> list[ProcessorSpec]:
        """Processors registered for a hook, in a stable order (empty if none)."""
        ...

    def has_processors(self, hook: str) -> bool:
        """Check whether at least one processor is registered for a hook."""
        ...


class ExtensionRegistry:
    """Registry of processor definitions contributed by modules and themes."""

    def __init__(self) -> None:
        self._definitions: dict[str, ProcessorSpec] = {}

    def register(self, spec: ProcessorSpec) -> None:
        """Register a processor definition.

        Raises:
            DuplicateProcessorError: If the id is already registered
        """
        if spec.id in self._definitions:
            raise DuplicateProcessorError(spec.id)
        self._definitions[spec.id] = spec
        logger.debug(
            "Registered processor '%s' for hook '%s' (%s: %s)",
            spec.id,
            spec.hook,
            spec.provider_type,
            spec.provider,
        )

    def get_definition(self, processor_id: str) -> ProcessorSpec | None:
        """Get a processor definition by id."""
        return self._definitions.get(processor_id)

    def definitions(self, theme: ActiveTheme | None = None) -> dict[str, ProcessorSpec]:
        """Get registered definitions, optionally only those eligible for a theme.

        Args:
            theme: Active theme to filter theme processors by. None returns
                every definition regardless of provenance.

        Returns:
            Dict mapping processor id to spec, in registration order
        """
        if theme is None:
            return dict(self._definitions)
        return {pid: spec for pid, spec in self._definitions.items() if _is_eligible(spec, theme)}

    def for_theme(self, theme: ActiveTheme | None) -> ThemeScopedRegistry:
        """Create a lookup view for one render session."""
        return ThemeScopedRegistry(self, theme)

    def clear(self) -> None:
        """Clear all registered processors (for testing)."""
        self._definitions.clear()

    def __len__(self) -> int:
        return len(self._definitions)


def _is_eligible(spec: ProcessorSpec, theme: ActiveTheme | None) -> bool:
    if not spec.is_theme_processor:
        return True
    return theme is not None and theme.includes(spec.provider)


class ThemeScopedRegistry:
    """Processor lookups filtered by an active theme's ancestry.

    Ordering: module processors in registration order, then theme processors
    from the most general base theme to the active theme. Results are
    memoized per hook, so the view must not outlive changes to the
    underlying registry.

    Attributes:
        theme: Active theme, or None when only module processors apply
    """

    def __init__(self, registry: ExtensionRegistry, theme: ActiveTheme | None) -> None:
        self._registry = registry
        self.theme = theme
        self._cache: dict[str, list[ProcessorSpec]] = {}

    def get_processors(self, hook: str) -> list[ProcessorSpec]:
        """Get the processors eligible for a hook.

        Args:
            hook: Hook name

        Returns:
            Ordered list of processors (empty for unknown hooks)
        """
        cached = self._cache.get(hook)
        if cached is None:
            cached = self._resolve(hook)
            self._cache[hook] = cached
        return list(cached)

    def has_processors(self, hook: str) -> bool:
        """Check whether any eligible processor is bound to a hook."""
        return bool(self.get_processors(hook))

    def _resolve(self, hook: str) -> list[ProcessorSpec]:
        modules: list[ProcessorSpec] = []
        themes: list[tuple[int, int, ProcessorSpec]] = []

        for index, spec in enumerate(self._registry.definitions().values()):
            if spec.hook != hook:
                continue
            if not spec.is_theme_processor:
                modules.append(spec)
                continue
            position = self.theme.position(spec.provider) if self.theme else None
            if position is not None:
                themes.append((position, index, spec))

        themes.sort(key=lambda item: (item[0], item[1]))
        return modules + [spec for _, _, spec in themes]


# Global registry
_registry = ExtensionRegistry()


def get_registry() -> ExtensionRegistry:
    """Get the global processor registry."""
    return _registry
