"""Active theme and base theme ancestry.

A theme may declare one base theme. The active theme's ancestry decides which
theme-provided processors and alter callbacks are eligible for a render.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from themecascade.errors import MissingThemeDependencyError, ThemeCycleError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActiveTheme:
    """Theme selected for a render session.

    Attributes:
        name: Machine name of the active theme
        base_themes: Ancestors, nearest parent first, most general last
    """

    name: str
    base_themes: tuple[str, ...] = field(default_factory=tuple)

    @property
    def ancestry(self) -> tuple[str, ...]:
        """Most general ancestor first, the active theme last."""
        return tuple(reversed(self.base_themes)) + (self.name,)

    def position(self, theme: str) -> int | None:
        """Index of a theme within the ancestry, or None if outside it."""
        try:
            return self.ancestry.index(theme)
        except ValueError:
            return None

    def includes(self, theme: str) -> bool:
        """Check whether a theme is the active theme or one of its ancestors."""
        return theme == self.name or theme in self.base_themes


def resolve_active_theme(name: str, themes: Mapping[str, str | None]) -> ActiveTheme:
    """Build an ActiveTheme by walking base theme declarations.

    Args:
        name: Theme to activate
        themes: Mapping of theme name to its base theme (or None)

    Returns:
        ActiveTheme with its resolved ancestors

    Raises:
        MissingThemeDependencyError: If the theme or a base theme is unknown
        ThemeCycleError: If base theme declarations loop
    """
    if name not in themes:
        raise MissingThemeDependencyError(name)

    chain = [name]
    base = themes[name]
    while base:
        if base in chain:
            raise ThemeCycleError(chain + [base])
        if base not in themes:
            raise MissingThemeDependencyError(chain[-1], base)
        chain.append(base)
        base = themes[base]

    theme = ActiveTheme(name=name, base_themes=tuple(chain[1:]))
    logger.debug("Resolved theme '%s' ancestry: %s", name, " → ".join(theme.ancestry))
    return theme
