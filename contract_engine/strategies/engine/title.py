"""Document title derivation."""

import re

from contract_engine.strategies.engine.answers import AnswerMap

TITLE_PREFIX = "Contrato de Alquiler"
UNKNOWN_PARTY = "Desconocido"
MULTIPLE_PARTIES_SUFFIX = " y otros"

_LEADING_COUNT = re.compile(r"^\s*(\d+)")

# (count selector, natural person name, legal entity name)
LANDLORD_FIELDS = ("PersonasLocador", "nombreLocadorPF1", "denominacionLegalLocadorPJ1")
TENANT_FIELDS = ("PersonasLocatario", "nombreLocatarioPF1", "denominacionLegalLocatarioPJ1")


def party_count(answers: AnswerMap, selector: str, default: int = 1) -> int:
    """Read a party count selector such as ``"2PLocador"`` or ``"3 personas"``."""
    match = _LEADING_COUNT.match(answers.text(selector))
    if not match:
        return default
    return max(int(match.group(1)), 1)


def party_label(answers: AnswerMap, fields: tuple[str, str, str]) -> str:
    selector, person_field, entity_field = fields
    name = answers.text(person_field).strip() or answers.text(entity_field).strip()
    label = name or UNKNOWN_PARTY
    if party_count(answers, selector) > 1:
        label += MULTIPLE_PARTIES_SUFFIX
    return label


def derive_title(answers: AnswerMap) -> str:
    """Build the document name, e.g. ``"Contrato de Alquiler Ana - Luis y otros"``."""
    return (
        f"{TITLE_PREFIX} {party_label(answers, LANDLORD_FIELDS)}"
        f" - {party_label(answers, TENANT_FIELDS)}"
    )
