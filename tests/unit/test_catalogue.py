"""Unit tests for the clause catalogue."""

import logging

from contract_engine.strategies.engine import Clause, ClauseCatalogue


class TestClauseCatalogue:
    """Test suite for ClauseCatalogue."""

    def test_from_rows(self, catalogue):
        assert len(catalogue) == 6
        assert catalogue.names() == {
            "mascotasClausula",
            "garantiaClausula",
            "expensasClausula",
            "logoClausula",
        }

    def test_lookup_by_trigger(self, catalogue):
        clause = catalogue.lookup("mascotasClausula", "no")
        assert clause.text == "No se permiten mascotas."
        assert catalogue.lookup("mascotasClausula", "quizas") is None
        assert catalogue.lookup("desconocido", "si") is None

    def test_blank_clause(self, catalogue):
        assert catalogue.lookup("expensasClausula", "no").is_blank

    def test_is_clause_placeholder(self, catalogue):
        assert catalogue.is_clause_placeholder("garantiaClausula")
        assert not catalogue.is_clause_placeholder("nombreGarantePF1")

    def test_duplicate_keeps_first(self, caplog):
        clauses = [
            Clause(placeholder_name="a", trigger_value="si", text="primera"),
            Clause(placeholder_name="a", trigger_value="si", text="segunda"),
        ]
        with caplog.at_level(logging.WARNING):
            catalogue = ClauseCatalogue(clauses)

        assert len(catalogue) == 1
        assert catalogue.lookup("a", "si").text == "primera"
        assert "Duplicate clause" in caplog.text

    def test_from_rows_pads_and_skips(self):
        rows = [
            ["a", "si"],
            ["", "si", "sin nombre"],
            ["b", None, "texto"],
        ]
        catalogue = ClauseCatalogue.from_rows(rows)

        assert len(catalogue) == 2
        assert catalogue.lookup("a", "si").is_blank
        assert catalogue.lookup("b", "").text == "texto"

    def test_triggers(self, catalogue):
        assert catalogue.triggers("garantiaClausula") == ["propietaria", "seguro"]
        assert catalogue.triggers("desconocido") == []

    def test_to_rows_round_trip(self, clause_rows):
        catalogue = ClauseCatalogue.from_rows(clause_rows)
        assert catalogue.to_rows() == clause_rows

    # =========================================================================
    # Reference Graph Tests
    # =========================================================================

    def test_references(self, catalogue):
        graph = catalogue.references()
        assert graph["mascotasClausula"] == {"garantiaClausula"}
        assert graph["garantiaClausula"] == set()

    def test_no_cycles(self, catalogue):
        assert catalogue.find_cycles() == []

    def test_self_reference_cycle(self):
        catalogue = ClauseCatalogue.from_rows([["a", "si", "otra vez {{a}}"]])
        assert catalogue.find_cycles() == [["a", "a"]]

    def test_mutual_reference_cycle(self):
        catalogue = ClauseCatalogue.from_rows(
            [
                ["a", "si", "ver {{b}}"],
                ["b", "si", "ver {{a}}"],
            ]
        )
        assert catalogue.find_cycles() == [["a", "b", "a"]]
