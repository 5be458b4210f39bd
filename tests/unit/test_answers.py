"""Unit tests for answer maps and hidden placeholder loading."""

import json

import pytest

from contract_engine.strategies.engine import AnswerMap, load_hidden_placeholders


class TestAnswerMap:
    """Test suite for AnswerMap."""

    def test_normalises_values(self):
        answers = AnswerMap({"a": True, "b": False, "c": 12, "d": None, "e": "texto"})

        assert answers["a"] == "si"
        assert answers["b"] == "no"
        assert answers["c"] == "12"
        assert answers["d"] is None
        assert answers["e"] == "texto"

    def test_custom_affirmative(self):
        answers = AnswerMap({"a": True, "b": "YES"}, affirmative="yes")
        assert answers["a"] == "yes"
        assert answers.is_affirmative("b")

    def test_text_and_has_value(self):
        answers = AnswerMap({"blank": "   ", "none": None, "value": "x"})

        assert answers.text("blank") == ""
        assert answers.text("none") == ""
        assert answers.text("missing") == ""
        assert not answers.has_value("blank")
        assert answers.has_value("value")

    def test_from_row_sequence(self):
        answers = AnswerMap.from_row(["a", "b", "c"], ["1", None])
        assert dict(answers) == {"a": "1"}

    def test_from_row_mapping(self):
        answers = AnswerMap.from_row(
            ["nombreLocadorPF1", "deseaLogoInmobiliaria"],
            {"nombreLocadorPF1": "Ana", "deseaLogoInmobiliaria": True, "ajeno": "x"},
        )
        assert dict(answers) == {"nombreLocadorPF1": "Ana", "deseaLogoInmobiliaria": "si"}

    def test_merged_returns_new_map(self):
        answers = AnswerMap({"a": "1"})
        merged = answers.merged({"b": "2"})

        assert "b" not in answers
        assert dict(merged) == {"a": "1", "b": "2"}


class TestHiddenPlaceholders:
    """Test suite for load_hidden_placeholders."""

    def test_packaged_list(self):
        hidden = load_hidden_placeholders()

        assert "clausulaAdicional" in hidden
        assert "nupciasLocadorPF1" in hidden

    def test_extra_names(self):
        hidden = load_hidden_placeholders(extra=["campoExtra", " "])
        assert "campoExtra" in hidden
        assert "" not in hidden

    def test_object_file(self, tmp_path):
        path = tmp_path / "hidden.json"
        path.write_text(json.dumps({"hidden_placeholders": ["x", "y"]}), encoding="utf-8")

        assert load_hidden_placeholders(path) == {"x", "y"}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_hidden_placeholders(tmp_path / "nope.json")

    def test_invalid_shape(self, tmp_path):
        path = tmp_path / "hidden.json"
        path.write_text(json.dumps({"names": "x"}), encoding="utf-8")

        with pytest.raises(ValueError):
            load_hidden_placeholders(path)
