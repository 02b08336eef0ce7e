"""Tests for the themecascade CLI."""

import json
from pathlib import Path

import pytest

from themecascade.cli import (
    Preprocess,
    Processors,
    Suggestions,
    Themes,
    load_variables,
    main,
)
from themecascade.errors import ThemeCascadeError

CONFIG_YAML = """\
themecascade:
  active_theme: child
  modules: [node]
  themes:
    base: null
    child: base
  processors:
    - id: node.defaults
      hook: node
      provider: node
      handler: themecascade.pipeline.processors.variables.set_variables
      params:
        values: {view_mode: full}
        overwrite: false
    - id: base.article
      hook: node__article
      provider: base
      handler: themecascade.pipeline.processors.attributes.add_classes
      params: {classes: [article]}
    - id: child.article
      hook: node__article
      provider: child
      handler: themecascade.pipeline.processors.attributes.add_classes
      params: {classes: [child-article]}
  suggestions:
    - hook: node
      provider: node
      handler: themecascade.pipeline.processors.suggestions.suggest_from_variable
      params: {base: node, key: bundle}
  alters:
    - key: suggestions_for_node
      provider: child
      handler: themecascade.pipeline.processors.suggestions.add_suggestions
      params: {names: [node__teaser]}
"""


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Create a config directory with a themecascade.yaml."""
    config = tmp_path / "config"
    config.mkdir()
    (config / "themecascade.yaml").write_text(CONFIG_YAML)
    return config


@pytest.fixture
def variables_file(tmp_path: Path) -> Path:
    path = tmp_path / "variables.yaml"
    path.write_text("bundle: article\ntitle: Hello\n")
    return path


class TestLoadVariables:
    """Test reading variable files."""

    def test_none_is_empty(self):
        assert load_variables(None) == {}

    def test_yaml(self, variables_file):
        assert load_variables(variables_file) == {"bundle": "article", "title": "Hello"}

    def test_json(self, tmp_path):
        path = tmp_path / "variables.json"
        path.write_text(json.dumps({"nested": {"a": [1, 2]}}))

        assert load_variables(path) == {"nested": {"a": [1, 2]}}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_variables(path) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ThemeCascadeError, match="not found"):
            load_variables(tmp_path / "nope.yaml")

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ThemeCascadeError, match="must contain a mapping"):
            load_variables(path)


class TestSuggestionsCommand:
    """Test the suggestions subcommand."""

    def test_json_output(self, config_dir, variables_file, capsys):
        main(Suggestions(hook="node", variables=variables_file, json=True), config_dir=config_dir)

        assert json.loads(capsys.readouterr().out) == ["node__article", "node__teaser"]

    def test_human_output(self, config_dir, variables_file, capsys):
        main(Suggestions(hook="node", variables=variables_file), config_dir=config_dir)

        out = capsys.readouterr().out
        assert "1. ✓ node__article" in out
        assert "2. - node__teaser" in out

    def test_other_theme_skips_theme_alters(self, config_dir, variables_file, capsys):
        main(Suggestions(hook="node", variables=variables_file, theme="base", json=True), config_dir=config_dir)

        assert json.loads(capsys.readouterr().out) == ["node__article"]

    def test_no_suggestions(self, config_dir, capsys):
        main(Suggestions(hook="page"), config_dir=config_dir)

        assert "No suggestions for 'page'" in capsys.readouterr().out


class TestPreprocessCommand:
    """Test the preprocess subcommand."""

    def test_cascade_output(self, config_dir, variables_file, capsys):
        main(Preprocess(hook="node", variables=variables_file), config_dir=config_dir)

        result = json.loads(capsys.readouterr().out)
        assert result == {
            "bundle": "article",
            "title": "Hello",
            "view_mode": "full",
            "attributes": {"class": ["article", "child-article"]},
        }

    def test_invalid_hook(self, config_dir, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(Preprocess(hook=""), config_dir=config_dir)

        assert exc_info.value.code == 1
        assert "non-empty string" in capsys.readouterr().err

    def test_processor_failure(self, config_dir, tmp_path, capsys):
        path = tmp_path / "broken.yaml"
        path.write_text("bundle: article\nattributes: [1]\n")

        with pytest.raises(SystemExit) as exc_info:
            main(Preprocess(hook="node", variables=path), config_dir=config_dir)

        assert exc_info.value.code == 1
        assert "Preprocess failed: AttributeError" in capsys.readouterr().err

    def test_config_error(self, tmp_path, capsys):
        (tmp_path / "themecascade.yaml").write_text("themecascade:\n  modules: 5\n")

        with pytest.raises(SystemExit) as exc_info:
            main(Preprocess(hook="node"), config_dir=tmp_path)

        assert exc_info.value.code == 1
        assert "Configuration error" in capsys.readouterr().err

    def test_config_not_a_mapping(self, tmp_path, capsys):
        (tmp_path / "themecascade.yaml").write_text("themecascade: [a]\n")

        with pytest.raises(SystemExit) as exc_info:
            main(Preprocess(hook="node"), config_dir=tmp_path)

        assert exc_info.value.code == 1
        assert "Configuration error" in capsys.readouterr().err


class TestProcessorsCommand:
    """Test the processors subcommand."""

    def test_json_output(self, config_dir, capsys):
        main(Processors(hook="node__article", json=True), config_dir=config_dir)

        assert json.loads(capsys.readouterr().out) == [
            {"id": "base.article", "provider": "base", "provider_type": "theme"},
            {"id": "child.article", "provider": "child", "provider_type": "theme"},
        ]

    def test_table_output(self, config_dir, capsys):
        main(Processors(hook="node"), config_dir=config_dir)

        out = capsys.readouterr().out
        assert "node.defaults" in out
        assert "module" in out

    def test_none_registered(self, config_dir, capsys):
        main(Processors(hook="page"), config_dir=config_dir)

        assert "No processors registered for 'page'" in capsys.readouterr().out


class TestThemesCommand:
    """Test the themes subcommand."""

    def test_lists_themes(self, config_dir, capsys):
        main(Themes(), config_dir=config_dir)

        out = capsys.readouterr().out
        assert "child" in out
        assert "base → child" in out

    def test_no_themes(self, tmp_path, capsys):
        main(Themes(), config_dir=tmp_path)

        assert "No themes configured" in capsys.readouterr().out

    def test_config_dir_from_environment(self, config_dir, monkeypatch, capsys):
        monkeypatch.setenv("THEMECASCADE_CONFIG_DIR", str(config_dir))

        main(Themes())

        assert "base → child" in capsys.readouterr().out

    def test_broken_theme_keeps_other_rows(self, tmp_path, capsys):
        (tmp_path / "themecascade.yaml").write_text(
            "themecascade:\n  themes:\n    base: null\n    child: base\n    broken: ghost\n"
        )

        main(Themes(), config_dir=tmp_path)

        out = capsys.readouterr().out
        assert "base → child" in out
        assert "broken" in out
        assert "ghost" in out
