"""Unit tests for iterative clause expansion."""

import logging

import pytest

from contract_engine.interfaces.resolution import ClauseExpansionLimitError
from contract_engine.strategies.engine import AnswerMap, ClauseCatalogue, ClauseResolver


class TestClauseResolver:
    """Test suite for ClauseResolver."""

    @pytest.fixture
    def resolver(self):
        return ClauseResolver(max_iterations=10)

    def test_rejects_invalid_bound(self):
        with pytest.raises(ValueError):
            ClauseResolver(max_iterations=0)

    def test_simple_clause(self, resolver, catalogue):
        answers = AnswerMap({"mascotasClausula": "no"})
        text, report = resolver.expand("Mascotas: {{mascotasClausula}}", catalogue, answers)

        assert text == "Mascotas: No se permiten mascotas."
        assert report.clauses_applied == ["mascotasClausula"]
        assert report.iterations == 1

    def test_nested_clause(self, resolver, catalogue):
        """A clause introducing another clause placeholder is expanded on the next pass."""
        answers = AnswerMap({"mascotasClausula": "si", "garantiaClausula": "seguro"})
        text, report = resolver.expand("{{mascotasClausula}}", catalogue, answers)

        assert text == "Se permiten mascotas. Seguro de caución."
        assert report.clauses_applied == ["mascotasClausula", "garantiaClausula"]
        assert report.iterations == 2

    def test_nested_clause_leaves_plain_placeholders(self, resolver, catalogue):
        answers = AnswerMap({"mascotasClausula": "si", "garantiaClausula": "propietaria"})
        text, _ = resolver.expand("{{mascotasClausula}}", catalogue, answers)

        assert text == "Se permiten mascotas. Garantía propietaria de {{nombreGarantePF1}}."

    def test_blank_clause_removed(self, resolver, catalogue):
        answers = AnswerMap({"expensasClausula": "no"})
        text, report = resolver.expand("A{{expensasClausula}}B", catalogue, answers)

        assert text == "AB"
        assert report.blank_clauses == ["expensasClausula"]
        assert report.missing_clauses == []

    def test_missing_clause_removed_and_reported(self, resolver, catalogue, caplog):
        answers = AnswerMap({"mascotasClausula": "quizas"})
        with caplog.at_level(logging.WARNING):
            text, report = resolver.expand("A{{mascotasClausula}}B", catalogue, answers)

        assert text == "AB"
        assert report.missing_clauses[0].placeholder_name == "mascotasClausula"
        assert report.missing_clauses[0].answer == "quizas"
        assert "No clause defined" in caplog.text

    def test_unanswered_clause_left_for_substitution(self, resolver, catalogue):
        text, report = resolver.expand("{{mascotasClausula}}", catalogue, AnswerMap())

        assert text == "{{mascotasClausula}}"
        assert report.iterations == 0

    def test_every_occurrence_replaced(self, resolver, catalogue):
        answers = AnswerMap({"garantiaClausula": "seguro"})
        text, _ = resolver.expand(
            "{{garantiaClausula}} / {{garantiaClausula}}", catalogue, answers
        )
        assert text == "Seguro de caución. / Seguro de caución."

    # =========================================================================
    # Iteration Bound Tests
    # =========================================================================

    def test_circular_reference_terminates(self, caplog):
        catalogue = ClauseCatalogue.from_rows(
            [
                ["a", "si", "[{{b}}]"],
                ["b", "si", "({{a}})"],
            ]
        )
        answers = AnswerMap({"a": "si", "b": "si"})
        resolver = ClauseResolver(max_iterations=4)

        with caplog.at_level(logging.WARNING):
            text, report = resolver.expand("{{a}}", catalogue, answers)

        assert report.iterations == 4
        assert report.hit_iteration_limit
        assert report.unresolved_clauses == ["a"]
        assert text == "[([({{a}})])]"
        assert "possible circular clause reference" in caplog.text

    def test_strict_mode_raises(self):
        catalogue = ClauseCatalogue.from_rows([["a", "si", "otra vez {{a}}"]])
        resolver = ClauseResolver(max_iterations=3, strict=True)

        with pytest.raises(ClauseExpansionLimitError) as exc_info:
            resolver.expand("{{a}}", catalogue, AnswerMap({"a": "si"}))

        assert exc_info.value.unresolved == ["a"]
        assert exc_info.value.iterations == 3

    def test_converges_within_bound(self, catalogue):
        """Reaching a fixed point on the last pass isn't reported as hitting the limit."""
        resolver = ClauseResolver(max_iterations=2, strict=True)
        answers = AnswerMap({"mascotasClausula": "si", "garantiaClausula": "seguro"})

        text, report = resolver.expand("{{mascotasClausula}}", catalogue, answers)

        assert "{{" not in text
        assert not report.hit_iteration_limit
