"""Exceptions raised by themecascade."""


class ThemeCascadeError(Exception):
    """Base exception for all themecascade errors."""

    pass


class InvalidHookNameError(ThemeCascadeError, ValueError):
    """Raised when a hook name is empty or not a string."""

    def __init__(self, hook: object) -> None:
        self.hook = hook
        super().__init__(f"Hook name must be a non-empty string, got {hook!r}")


class DuplicateProcessorError(ThemeCascadeError):
    """Raised when a processor id is registered twice."""

    def __init__(self, processor_id: str) -> None:
        self.processor_id = processor_id
        super().__init__(f"Processor already registered: {processor_id}")


class MissingThemeDependencyError(ThemeCascadeError):
    """Raised when a theme or one of its base themes is not configured."""

    def __init__(self, theme: str, dependency: str | None = None) -> None:
        self.theme = theme
        self.dependency = dependency
        if dependency is None:
            message = f"Theme not found: {theme}"
        else:
            message = f"Base theme '{dependency}' of theme '{theme}' is not configured"
        super().__init__(message)


class ThemeCycleError(ThemeCascadeError):
    """Raised when base theme declarations form a cycle."""

    def __init__(self, chain: list[str]) -> None:
        self.chain = chain
        super().__init__(f"Base theme cycle detected: {' -> '.join(chain)}")


class ConfigError(ThemeCascadeError):
    """Raised when the themecascade configuration is invalid."""

    pass
