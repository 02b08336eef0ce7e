"""Processor definitions and decorator.

Defines the ProcessorSpec class and the @preprocessor decorator that binds a
handler function to exactly one hook name.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal

from themecascade.pipeline.context import validate_hook_name

if TYPE_CHECKING:
    from themecascade.pipeline.context import VariableTree
    from themecascade.pipeline.registry import ExtensionRegistry


# Type aliases
ProviderType = Literal["module", "theme"]
HandlerFn = Callable[["VariableTree", dict[str, Any]], "VariableTree"]

PROVIDER_TYPES: tuple[ProviderType, ...] = ("module", "theme")


@dataclass
class ProcessorSpec:
    """Definition of a registered preprocessor.

    Attributes:
        id: Stable identifier, unique within a registry
        hook: Hook name the processor is bound to
        handler: Function that transforms the variable tree
        provider: Name of the extension contributing the processor
        provider_type: "module" (always eligible) or "theme" (eligible only
            inside the active theme's ancestry)
        params: Static parameters passed to the handler
    """

    id: str
    hook: str
    handler: HandlerFn
    provider: str
    provider_type: ProviderType = "module"
    params: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        validate_hook_name(self.hook)
        if self.provider_type not in PROVIDER_TYPES:
            raise ValueError(f"Invalid provider type for '{self.id}': {self.provider_type!r}")

    def __hash__(self) -> int:
        return hash(self.id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProcessorSpec):
            return NotImplemented
        return self.id == other.id

    @property
    def is_theme_processor(self) -> bool:
        """True if the processor is contributed by a theme."""
        return self.provider_type == "theme"

    def apply(self, variables: VariableTree) -> VariableTree:
        """Run the handler against a variable tree.

        Args:
            variables: Variable tree as left by the previous processor

        Returns:
            The handler's result, which may be the same mapping or a replacement
        """
        return self.handler(variables, dict(self.params))


def preprocessor(
    hook: str,
    *,
    processor_id: str | None = None,
    provider: str | None = None,
    provider_type: ProviderType = "module",
    params: dict[str, Any] | None = None,
    registry: ExtensionRegistry | None = None,
) -> Callable[[HandlerFn], HandlerFn]:
    """Decorator to register a function as a preprocessor for a hook.

    Args:
        hook: Hook name the processor is bound to
        processor_id: Identifier (defaults to "{provider}.{function name}")
        provider: Owning extension (defaults to the function's top-level package)
        provider_type: "module" or "theme"
        params: Static parameters passed to the handler
        registry: Registry to register into (defaults to the global registry)

    Returns:
        Decorator function

    Example:
        @preprocessor("image", provider="my_theme", provider_type="theme")
        def add_image_class(variables: dict, params: dict) -> dict:
            variables.setdefault("attributes", {}).setdefault("class", []).append("img")
            return variables
    """

    def decorator(fn: HandlerFn) -> HandlerFn:
        from themecascade.pipeline.registry import get_registry

        owner = provider or fn.__module__.split(".")[0]
        spec = create_processor_spec(
            processor_id or f"{owner}.{fn.__name__}",
            hook,
            fn,
            provider=owner,
            provider_type=provider_type,
            params=params,
        )
        target = registry if registry is not None else get_registry()
        target.register(spec)

        # Attach spec to function for introspection
        fn._processor_spec = spec  # type: ignore[attr-defined]
        return fn

    return decorator


def create_processor_spec(
    processor_id: str,
    hook: str,
    handler: HandlerFn,
    *,
    provider: str,
    provider_type: ProviderType = "module",
    params: dict[str, Any] | None = None,
) -> ProcessorSpec:
    """Create a ProcessorSpec programmatically (without decorator).

    Args:
        processor_id: Stable identifier
        hook: Hook name the processor is bound to
        handler: Function that transforms the variable tree
        provider: Owning extension name
        provider_type: "module" or "theme"
        params: Static parameters passed to handler

    Returns:
        ProcessorSpec instance
    """
    return ProcessorSpec(
        id=processor_id,
        hook=hook,
        handler=handler,
        provider=provider,
        provider_type=provider_type,
        params=params or {},
    )
