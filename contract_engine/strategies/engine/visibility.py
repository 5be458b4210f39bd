"""Form section visibility as derived state.

The contract form shows or hides groups of fields depending on earlier
answers. These functions compute the visible set from the answers alone.
"""

from contract_engine.strategies.engine.answers import AnswerMap
from contract_engine.strategies.engine.title import party_count

MAX_PARTIES_PER_SIDE = 3
MARRIED = "casado/a"
LATER_START = "Fecha posterior"
LATER_SIGNATURE = "next"

# party -> number of natural persons the form supports
MARITAL_PARTIES = {"Locador": 3, "Locatario": 3, "Garante": 2}


def _married(answers: AnswerMap, party: str, number: int) -> bool:
    return answers.text(f"estadocivil{party}PF{number}").strip() == MARRIED


def visible_sections(answers: AnswerMap) -> frozenset[str]:
    """Return the ids of the form sections that should be visible."""
    visible: set[str] = set()

    landlords = min(party_count(answers, "PersonasLocador"), MAX_PARTIES_PER_SIDE)
    tenants = min(party_count(answers, "PersonasLocatario"), MAX_PARTIES_PER_SIDE)
    visible.update(f"Locadora-{i}-persona" for i in range(1, landlords + 1))
    visible.update(f"Locataria-{i}-persona" for i in range(1, tenants + 1))

    for party, count in MARITAL_PARTIES.items():
        for number in range(1, count + 1):
            if _married(answers, party, number):
                visible.add(f"nupcias{party}{number}")

    if answers.text("inputSelectorLocacionComienz") == LATER_START:
        visible.add("Fecha-inicio-locacion-vivienda")
    if answers.text("signature-date-selector") == LATER_SIGNATURE:
        visible.add("Fecha-firma-locacion-vivienda")

    return frozenset(visible)


def suppressed_placeholders(answers: AnswerMap) -> frozenset[str]:
    """Marriage placeholders hidden because the party is not married."""
    hidden: set[str] = set()
    for party, count in MARITAL_PARTIES.items():
        for number in range(1, count + 1):
            if not _married(answers, party, number):
                hidden.add(f"nupcias{party}PF{number}")
                hidden.add(f"conyuge{party}PF{number}")
    return frozenset(hidden)
