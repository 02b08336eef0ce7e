"""themecascade CLI for inspecting and running a configured cascade - Tyro implementation."""

import json
import logging
import sys
from builtins import print as builtin_print
from pathlib import Path
from typing import Annotated, Any, NoReturn

import attrs
import tyro
import yaml
from rich import print
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from themecascade.config import CascadeConfig, default_config_dir, load_config
from themecascade.errors import MissingThemeDependencyError, ThemeCascadeError, ThemeCycleError

logger = logging.getLogger(__name__)


# Subcommand definitions using attrs
@attrs.define
class Suggestions:
    """Show the suggestions resolved for a hook."""

    hook: Annotated[str, tyro.conf.Positional]
    """Base hook name."""

    variables: Annotated[Path | None, tyro.conf.arg(aliases=["-v"])] = None
    """YAML or JSON file holding the variable tree."""

    theme: Annotated[str | None, tyro.conf.arg(aliases=["-t"])] = None
    """Theme to activate instead of the configured active_theme."""

    json: Annotated[bool, tyro.conf.arg(aliases=["-j"])] = False
    """Output suggestions as a JSON list."""


@attrs.define
class Preprocess:
    """Run the preprocess cascade for a hook and print the resulting variables."""

    hook: Annotated[str, tyro.conf.Positional]
    """Base hook name."""

    variables: Annotated[Path | None, tyro.conf.arg(aliases=["-v"])] = None
    """YAML or JSON file holding the variable tree."""

    theme: Annotated[str | None, tyro.conf.arg(aliases=["-t"])] = None
    """Theme to activate instead of the configured active_theme."""


@attrs.define
class Processors:
    """List the processors eligible for a hook under the active theme."""

    hook: Annotated[str, tyro.conf.Positional]
    """Hook or suggestion name."""

    theme: Annotated[str | None, tyro.conf.arg(aliases=["-t"])] = None
    """Theme to activate instead of the configured active_theme."""

    json: Annotated[bool, tyro.conf.arg(aliases=["-j"])] = False
    """Output processors as JSON."""


@attrs.define
class Themes:
    """Show configured themes and their base theme ancestry."""


# Type alias for all subcommands
Command = (
    Annotated[Suggestions, tyro.conf.subcommand(name="suggestions")]
    | Annotated[Preprocess, tyro.conf.subcommand(name="preprocess")]
    | Annotated[Processors, tyro.conf.subcommand(name="processors")]
    | Annotated[Themes, tyro.conf.subcommand(name="themes")]
)


def setup_logging(debug: bool = False) -> None:
    """Configure logging with 100-character text width."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)-20s - %(levelname)-8s - %(message).100s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    if debug:
        logging.getLogger("themecascade").setLevel(logging.DEBUG)


def fail(message: str) -> NoReturn:
    """Print an error in red to stderr and exit with status 1."""
    print(f"[red]{escape(message)}[/red]", file=sys.stderr)
    sys.exit(1)


def load_variables(path: Path | None) -> dict[str, Any]:
    """Load a variable tree from a YAML or JSON file.

    Args:
        path: File to read, or None for an empty tree

    Returns:
        Variable tree

    Raises:
        ThemeCascadeError: If the file is missing, unparsable or not a mapping
    """
    if path is None:
        return {}
    if not path.exists():
        raise ThemeCascadeError(f"Variables file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ThemeCascadeError(f"Invalid variables file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ThemeCascadeError(f"Variables file must contain a mapping, got {type(data).__name__}")
    return data


def show_suggestions(config: CascadeConfig, cmd: Suggestions) -> None:
    """Handle the suggestions subcommand."""
    engine = config.build_engine(cmd.theme)
    suggestions = engine.get_suggestions(cmd.hook, load_variables(cmd.variables))

    if cmd.json:
        builtin_print(json.dumps(suggestions, indent=2))
        return

    if not suggestions:
        print(f"[yellow]No suggestions for '{cmd.hook}'[/yellow]")
        return

    console = Console()
    console.print(f"[bold]Suggestions for[/bold] [cyan]{cmd.hook}[/cyan]:")
    for i, suggestion in enumerate(suggestions, start=1):
        registered = engine.registry.has_processors(suggestion)
        marker = "[green]✓[/green]" if registered else "[dim]-[/dim]"
        console.print(f"  {i}. {marker} {suggestion}")


def run_preprocess(config: CascadeConfig, cmd: Preprocess) -> None:
    """Handle the preprocess subcommand."""
    engine = config.build_engine(cmd.theme)
    variables = engine.preprocess(cmd.hook, load_variables(cmd.variables))
    builtin_print(json.dumps(dict(variables), indent=2, default=str))


def show_processors(config: CascadeConfig, cmd: Processors) -> None:
    """Handle the processors subcommand."""
    engine = config.build_engine(cmd.theme)
    processors = engine.registry.get_processors(cmd.hook)

    if cmd.json:
        data = [
            {"id": spec.id, "provider": spec.provider, "provider_type": spec.provider_type}
            for spec in processors
        ]
        builtin_print(json.dumps(data, indent=2))
        return

    if not processors:
        print(f"[yellow]No processors registered for '{cmd.hook}'[/yellow]")
        return

    table = Table(title=f"Processors for {cmd.hook}", show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Processor", style="cyan")
    table.add_column("Provider", style="green")
    table.add_column("Type", style="yellow")
    for i, spec in enumerate(processors, start=1):
        table.add_row(str(i), spec.id, spec.provider, spec.provider_type)

    Console().print(table)


def show_themes(config: CascadeConfig) -> None:
    """Handle the themes subcommand."""
    if not config.themes:
        print("[yellow]No themes configured[/yellow]")
        return

    table = Table(title="Themes", show_header=True, header_style="bold")
    table.add_column("Theme", style="cyan")
    table.add_column("Base Theme", style="green")
    table.add_column("Ancestry", style="magenta")
    table.add_column("Active")

    for name, base in config.themes.items():
        try:
            theme = config.resolve_theme(name)
        except (MissingThemeDependencyError, ThemeCycleError) as e:
            ancestry = f"[red]{escape(str(e))}[/red]"
        else:
            ancestry = " → ".join(theme.ancestry) if theme else name
        active = "[green]✓[/green]" if name == config.active_theme else ""
        table.add_row(name, base or "-", ancestry, active)

    Console().print(table)


def main(
    cmd: Annotated[Command, tyro.conf.arg(name="")],
    *,
    config_dir: Annotated[Path | None, tyro.conf.arg(help="Configuration directory")] = None,
) -> None:
    """themecascade - cascading hook preprocessing.

    Resolves hook suggestions and applies module and theme processors to
    a variable tree, as configured in themecascade.yaml.
    """
    if config_dir is None:
        config_dir = default_config_dir()

    try:
        config = load_config(config_dir)
    except ThemeCascadeError as e:
        setup_logging()
        fail(f"Configuration error: {e}")

    setup_logging(config.debug)

    try:
        if isinstance(cmd, Suggestions):
            show_suggestions(config, cmd)

        elif isinstance(cmd, Preprocess):
            run_preprocess(config, cmd)

        elif isinstance(cmd, Processors):
            show_processors(config, cmd)

        elif isinstance(cmd, Themes):
            show_themes(config)

    except ThemeCascadeError as e:
        fail(str(e))
    except Exception as e:
        # Extension callbacks failed; the cascade is all-or-nothing
        fail(f"Preprocess failed: {type(e).__name__}: {e}")


def entry_point() -> None:
    """Entry point for the themecascade command."""
    tyro.cli(main)


if __name__ == "__main__":
    entry_point()
