"""Cascading preprocess pipeline for themecascade.

This module implements hook-based variable preprocessing with:
- Suggestions nominated by modules and altered by modules, then themes
- Processors filtered by provenance and the active theme's ancestry
- A single forward pass over one shared variable tree

Formal Model:
    Processor pᵢ: Variables → Variables
    P(h) = [p₁, ..., pₙ] processors registered for hook h

    apply(h, v)      = pₙ(...p₂(p₁(v)))
    preprocess(h, v) = fold(apply, [h] + [s ∈ suggestions(h, v) | P(s) ≠ ∅], v)
"""

from themecascade.pipeline.cascade import CascadeEngine
from themecascade.pipeline.context import VariableTree, alter_keys, suggestions_key
from themecascade.pipeline.extensions import ModuleHandler, ThemeHandler
from themecascade.pipeline.processor import ProcessorSpec, create_processor_spec, preprocessor
from themecascade.pipeline.registry import (
    ExtensionRegistry,
    ProcessorRegistry,
    ThemeScopedRegistry,
    get_registry,
)
from themecascade.pipeline.suggestions import SuggestionResolver
from themecascade.pipeline.theme import ActiveTheme, resolve_active_theme

__all__ = [
    "ActiveTheme",
    "CascadeEngine",
    "ExtensionRegistry",
    "ModuleHandler",
    "ProcessorRegistry",
    "ProcessorSpec",
    "SuggestionResolver",
    "ThemeHandler",
    "ThemeScopedRegistry",
    "VariableTree",
    "alter_keys",
    "create_processor_spec",
    "get_registry",
    "preprocessor",
    "resolve_active_theme",
    "suggestions_key",
]
