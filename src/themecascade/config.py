"""Configuration management for themecascade.

Configuration Discovery Precedence (Highest to Lowest Priority):
===============================================================

1. **THEMECASCADE_CONFIG_DIR Environment Variable** (Highest Priority)
   - Looks for: `${THEMECASCADE_CONFIG_DIR}/themecascade.yaml`
   - Use case: Development, testing, per-site configuration

2. **~/.themecascade Directory** (Fallback)
   - Looks for: `~/.themecascade/themecascade.yaml`
   - Use case: Default user installations

If no `themecascade.yaml` is found, default configuration is applied (no
extensions, no active theme).

Example themecascade.yaml:
--------
themecascade:
  active_theme: child
  modules: [node]
  themes:
    base: null
    child: base
  processors:
    - id: child.image
      hook: image
      provider: child
      handler: themecascade.pipeline.processors.attributes.add_classes
      params: {classes: [my-image]}
  suggestions:
    - hook: node
      provider: node
      handler: themecascade.pipeline.processors.suggestions.suggest_from_variable
      params: {base: node, key: bundle}
"""

import functools
import importlib
import logging
import os
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from themecascade.errors import ConfigError
from themecascade.pipeline.cascade import CascadeEngine
from themecascade.pipeline.context import suggestions_key
from themecascade.pipeline.extensions import ModuleHandler, ThemeHandler
from themecascade.pipeline.processor import ProviderType, create_processor_spec
from themecascade.pipeline.registry import ExtensionRegistry
from themecascade.pipeline.suggestions import SuggestionResolver
from themecascade.pipeline.theme import ActiveTheme, resolve_active_theme

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "themecascade.yaml"
CONFIG_DIR_ENV = "THEMECASCADE_CONFIG_DIR"


class ProcessorConfig(BaseModel):
    """A processor bound to a hook."""

    id: str
    """Stable processor identifier"""

    hook: str
    """Hook name the processor is bound to"""

    provider: str
    """Module or theme contributing the processor"""

    handler: str
    """Python import path to the handler function"""

    params: dict[str, Any] = Field(default_factory=dict)
    """Static parameters passed to the handler"""


class SuggestionConfig(BaseModel):
    """A suggestion provider for a base hook."""

    hook: str
    """Base hook the provider nominates suggestions for"""

    provider: str
    """Module contributing the provider"""

    handler: str
    """Python import path to the provider function"""

    params: dict[str, Any] = Field(default_factory=dict)
    """Keyword arguments bound to the provider"""


class AlterConfig(BaseModel):
    """An alter callback for a suggestion list."""

    key: str
    """Alter key: suggestions or suggestions_for_<hook>"""

    provider: str
    """Module or theme contributing the callback"""

    handler: str
    """Python import path to the callback"""

    params: dict[str, Any] = Field(default_factory=dict)
    """Keyword arguments bound to the callback"""


def import_string(path: str) -> Any:
    """Import an attribute from a dotted path like "package.module.attr".

    Raises:
        ConfigError: If the module or attribute cannot be imported
    """
    module_path, _, attr = path.rpartition(".")
    if not module_path:
        raise ConfigError(f"Invalid import path: {path!r}")
    try:
        module = importlib.import_module(module_path)
        return getattr(module, attr)
    except (ImportError, AttributeError) as e:
        raise ConfigError(f"Failed to import {path}: {e}") from e


def _bind(handler: Callable[..., Any], params: dict[str, Any]) -> Callable[..., Any]:
    return functools.partial(handler, **params) if params else handler


class CascadeConfig(BaseSettings):
    """Main configuration for themecascade that reads from themecascade.yaml."""

    model_config = SettingsConfigDict(
        env_prefix="THEMECASCADE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Core settings
    debug: bool = False

    # Theme selected for render sessions (None = module processors only)
    active_theme: str | None = None

    # Module names in callback invocation order
    modules: list[str] = Field(default_factory=list)

    # Theme name -> base theme name (None for a root theme)
    themes: dict[str, str | None] = Field(default_factory=dict)

    processors: list[ProcessorConfig] = Field(default_factory=list)
    suggestions: list[SuggestionConfig] = Field(default_factory=list)
    alters: list[AlterConfig] = Field(default_factory=list)

    # Path to the loaded config file
    config_path: Path = Field(default_factory=lambda: Path("./themecascade.yaml"))

    def provider_type(self, provider: str) -> ProviderType:
        """Classify an extension as module or theme.

        Raises:
            ConfigError: If the provider is unknown or declared as both
        """
        is_module = provider in self.modules
        is_theme = provider in self.themes
        if is_module and is_theme:
            raise ConfigError(f"Extension '{provider}' is declared as both a module and a theme")
        if is_module:
            return "module"
        if is_theme:
            return "theme"
        raise ConfigError(f"Unknown extension '{provider}': add it to 'modules' or 'themes'")

    def resolve_theme(self, name: str | None = None) -> ActiveTheme | None:
        """Resolve a theme (default: active_theme) and its ancestry."""
        name = name or self.active_theme
        if not name:
            return None
        return resolve_active_theme(name, self.themes)

    def build_registry(self) -> ExtensionRegistry:
        """Create a registry holding every configured processor.

        Raises:
            ConfigError: If a provider is unknown or a handler cannot be imported
        """
        registry = ExtensionRegistry()
        for entry in self.processors:
            spec = create_processor_spec(
                entry.id,
                entry.hook,
                import_string(entry.handler),
                provider=entry.provider,
                provider_type=self.provider_type(entry.provider),
                params=entry.params,
            )
            registry.register(spec)
        logger.debug("Loaded %d processor(s)", len(registry))
        return registry

    def build_module_handler(self) -> ModuleHandler:
        """Create the module dispatcher with providers and module alters."""
        handler = ModuleHandler(self.modules)
        for entry in self.suggestions:
            if self.provider_type(entry.provider) != "module":
                raise ConfigError(f"Suggestion providers must belong to a module, got theme '{entry.provider}'")
            fn = _bind(import_string(entry.handler), entry.params)
            handler.register_provider(suggestions_key(entry.hook), fn, entry.provider)

        for entry in self.alters:
            if self.provider_type(entry.provider) == "module":
                handler.register_alter(entry.key, _bind(import_string(entry.handler), entry.params), entry.provider)
        return handler

    def build_theme_handler(self) -> ThemeHandler:
        """Create the theme dispatcher with theme alters."""
        handler = ThemeHandler()
        for entry in self.alters:
            if self.provider_type(entry.provider) == "theme":
                handler.register_alter(entry.key, _bind(import_string(entry.handler), entry.params), entry.provider)
        return handler

    def build_engine(self, theme: str | None = None) -> CascadeEngine:
        """Assemble a cascade engine for one render session.

        Args:
            theme: Theme to activate (defaults to active_theme)

        Returns:
            CascadeEngine wired to this configuration
        """
        active = self.resolve_theme(theme)
        resolver = SuggestionResolver(self.build_module_handler(), self.build_theme_handler(), active)
        return CascadeEngine(resolver, self.build_registry().for_theme(active))

    @classmethod
    def from_yaml(cls, yaml_path: Path, **kwargs: Any) -> "CascadeConfig":
        """Load configuration from themecascade.yaml file.

        Args:
            yaml_path: Path to the themecascade.yaml file
            **kwargs: Overrides applied on top of the file's values

        Returns:
            CascadeConfig instance

        Raises:
            ConfigError: If the file is not valid YAML or fails validation
        """
        data: dict[str, Any] = {}
        if yaml_path.exists():
            try:
                with yaml_path.open() as f:
                    document = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {yaml_path}: {e}") from e

            if not isinstance(document, dict):
                raise ConfigError(f"{yaml_path} must contain a mapping, got {type(document).__name__}")
            data = document.get("themecascade") or {}
            if not isinstance(data, dict):
                raise ConfigError(f"'themecascade' section in {yaml_path} must be a mapping, got {type(data).__name__}")

        try:
            return cls(**{**data, **kwargs, "config_path": yaml_path})
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {yaml_path}:\n{e}") from e


def default_config_dir() -> Path:
    """Config directory from $THEMECASCADE_CONFIG_DIR, else ~/.themecascade."""
    env_config_dir = os.environ.get(CONFIG_DIR_ENV)
    if env_config_dir:
        config_dir = Path(env_config_dir)
        logger.info(f"Using config directory from environment: {config_dir}")
        return config_dir
    return Path.home() / ".themecascade"


def load_config(config_dir: Path) -> CascadeConfig:
    """Load themecascade.yaml from a directory, or defaults if absent."""
    yaml_path = config_dir / CONFIG_FILENAME
    if yaml_path.exists():
        logger.info(f"Loading themecascade config from: {yaml_path}")
    else:
        logger.info(f"{CONFIG_FILENAME} not found at {yaml_path}, using default config")
    return CascadeConfig.from_yaml(yaml_path)


# Global configuration instance
_config_instance: CascadeConfig | None = None
_config_lock = threading.Lock()


def get_config() -> CascadeConfig:
    """Get the configuration instance."""
    global _config_instance

    if _config_instance is None:
        with _config_lock:
            # Double-check locking pattern
            if _config_instance is None:
                _config_instance = load_config(default_config_dir())

    return _config_instance


def set_config_instance(config: CascadeConfig) -> None:
    """Set the global configuration instance (for testing)."""
    global _config_instance
    _config_instance = config


def clear_config_instance() -> None:
    """Clear the global configuration instance (for testing)."""
    global _config_instance
    _config_instance = None
