"""Tests for the reusable processors, providers and alter callbacks."""

import pytest

from themecascade.pipeline.processors import (
    add_classes,
    add_suggestions,
    append_content,
    remove_suggestions,
    set_variables,
    suggest_from_variable,
)


class TestAddClasses:
    """Test the add_classes processor."""

    def test_creates_attributes(self):
        result = add_classes({}, {"classes": ["my-test-image-class"]})
        assert result == {"attributes": {"class": ["my-test-image-class"]}}

    def test_appends_without_duplicates(self):
        variables = {"attributes": {"class": ["a"], "id": "x"}}

        add_classes(variables, {"classes": ["a", "b"]})

        assert variables["attributes"] == {"class": ["a", "b"], "id": "x"}

    def test_single_class_string(self):
        assert add_classes({}, {"classes": "solo"})["attributes"]["class"] == ["solo"]

    def test_string_class_attribute_split(self):
        variables = {"attributes": {"class": "a b"}}
        add_classes(variables, {"classes": ["c"]})
        assert variables["attributes"]["class"] == ["a", "b", "c"]

    def test_no_classes_logs_warning(self, caplog):
        variables = {"x": 1}

        with caplog.at_level("WARNING"):
            assert add_classes(variables, {}) == {"x": 1}

        assert "No classes configured" in caplog.text


class TestVariableProcessors:
    """Test set_variables and append_content."""

    def test_set_variables_overwrites(self):
        assert set_variables({"a": 1}, {"values": {"a": 2, "b": 3}}) == {"a": 2, "b": 3}

    def test_set_variables_defaults_only(self):
        result = set_variables({"a": 1}, {"values": {"a": 2, "b": 3}, "overwrite": False})
        assert result == {"a": 1, "b": 3}

    def test_set_variables_copies_values(self):
        params = {"values": {"items": []}}
        result = set_variables({}, params)
        result["items"].append(1)

        assert params["values"]["items"] == []

    def test_append_content(self):
        variables = {"content": [{"#markup": "first"}]}
        append_content(variables, {"item": {"#markup": "Hello world."}})

        assert variables["content"] == [{"#markup": "first"}, {"#markup": "Hello world."}]

    def test_append_content_creates_list(self):
        assert append_content({}, {"item": "x"}) == {"content": ["x"]}


class TestSuggestionHelpers:
    """Test the suggestion provider and alter callbacks."""

    def test_suggest_from_variable(self):
        assert suggest_from_variable({"bundle": "article"}, base="node", key="bundle") == ["node__article"]

    def test_suggest_from_missing_variable(self):
        assert suggest_from_variable({}, base="node", key="bundle") == []
        assert suggest_from_variable({"bundle": ""}, base="node", key="bundle") == []

    @pytest.mark.parametrize("value", [[], (), {}])
    def test_suggest_from_empty_container(self, value):
        assert suggest_from_variable({"bundle": value}, base="node", key="bundle") == []

    def test_suggest_from_falsy_scalar(self):
        assert suggest_from_variable({"page": 0}, base="page", key="page") == ["page__0"]

    def test_add_suggestions(self):
        suggestions = ["a"]
        add_suggestions(suggestions, {}, "node", names=["b", "a"])
        assert suggestions == ["a", "b", "a"]

    def test_add_suggestions_prepend(self):
        suggestions = ["a"]
        add_suggestions(suggestions, {}, "node", names=["z"], prepend=True)
        assert suggestions == ["z", "a"]

    def test_remove_suggestions_in_place(self):
        suggestions = ["a", "b", "a", "c"]
        original = suggestions

        remove_suggestions(suggestions, {}, "node", names=["a"])

        assert original == ["b", "c"]
