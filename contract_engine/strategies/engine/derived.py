"""Answers computed from other answers.

The contract form fills a few hidden fields on its own: amounts written out
in Spanish words, the lease term description and its start/end dates, and
the signature date. ``derive_answers`` computes the same fields server-side
so a resolution pass does not depend on the browser having done it.
"""

import calendar
import logging
import re
from datetime import date, timedelta

from contract_engine.strategies.engine.answers import AnswerMap

logger = logging.getLogger(__name__)

_UNITS = ["cero", "uno", "dos", "tres", "cuatro", "cinco", "seis", "siete", "ocho", "nueve"]
_TEENS = [
    "diez", "once", "doce", "trece", "catorce", "quince",
    "dieciséis", "diecisiete", "dieciocho", "diecinueve",
]
_TWENTIES = [
    "veinte", "veintiuno", "veintidós", "veintitrés", "veinticuatro",
    "veinticinco", "veintiséis", "veintisiete", "veintiocho", "veintinueve",
]
_TENS = ["", "", "", "treinta", "cuarenta", "cincuenta", "sesenta", "setenta", "ochenta", "noventa"]
_HUNDREDS = [
    "", "ciento", "doscientos", "trescientos", "cuatrocientos",
    "quinientos", "seiscientos", "setecientos", "ochocientos", "novecientos",
]
MONTHS = [
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
]

TERM_UNITS = {"días": "día", "meses": "mes", "años": "año"}
MAX_AMOUNT = 999_999_999

# Source fields and the hidden fields the form derives from them
RENT_FIELD = "canonDePagoLocacion"
RENT_WORDS_FIELD = "formatted-canon-hidden"
DEPOSIT_FIELD = "sumaDepositoGarantiaLocacion"
DEPOSIT_WORDS_FIELD = "hiddensumaDepositoGarantiaLocacion"
TERM_UNIT_FIELD = "inputLocacionUnidadPlazo"
TERM_QUANTITY_FIELD = "inputLocacionCantidadUnidad"
START_SELECTOR_FIELD = "inputSelectorLocacionComienz"
CUSTOM_START_FIELD = "custom-start-date"
TERM_FIELD = "hiddenInputLocacionPlazo"
START_DATE_FIELD = "hiddenInputLocacionFechaInicio"
END_DATE_FIELD = "hiddenInputLocacionFechaTermino"
SIGNATURE_SELECTOR_FIELD = "signature-date-selector"
CUSTOM_SIGNATURE_FIELD = "custom-signature-date"
SIGNATURE_DATE_FIELD = "formatted-signature-forward-date"


def _below_hundred(n: int, apocope: bool) -> str:
    if n < 10:
        return "un" if (n == 1 and apocope) else _UNITS[n]
    if n < 20:
        return _TEENS[n - 10]
    if n < 30:
        return "veintiún" if (n == 21 and apocope) else _TWENTIES[n - 20]
    tens, unit = divmod(n, 10)
    if not unit:
        return _TENS[tens]
    return f"{_TENS[tens]} y {'un' if (unit == 1 and apocope) else _UNITS[unit]}"


def _below_thousand(n: int, apocope: bool) -> str:
    hundreds, rest = divmod(n, 100)
    parts = []
    if hundreds:
        parts.append("cien" if n == 100 else _HUNDREDS[hundreds])
    if rest:
        parts.append(_below_hundred(rest, apocope))
    return " ".join(parts)


def spanish_words(num: int, apocope: bool = False) -> str:
    """Spell out a non-negative integer in lowercase Spanish.

    Args:
        num: Number to spell, at most 999,999,999.
        apocope: Use the short form before a masculine noun
            ("un", "veintiún") instead of "uno", "veintiuno".
    """
    if num < 0 or num > MAX_AMOUNT:
        raise ValueError(f"Number out of range for Spanish words: {num}")
    if num == 0:
        return _UNITS[0]

    millions, rest = divmod(num, 1_000_000)
    thousands, units = divmod(rest, 1000)
    parts = []
    if millions:
        parts.append("un millón" if millions == 1 else f"{_below_thousand(millions, True)} millones")
    if thousands:
        parts.append("mil" if thousands == 1 else f"{_below_thousand(thousands, True)} mil")
    if units:
        parts.append(_below_thousand(units, apocope))
    return " ".join(parts)


def number_to_words(num: int) -> str:
    """Amount in words as printed in the contract, e.g. ``"Ciento cincuenta mil"``."""
    words = spanish_words(num)
    return words[0].upper() + words[1:]


def term_description(quantity: int, unit: str) -> str:
    """Describe a lease term, e.g. ``"veinticuatro (24) meses"``.

    Raises:
        ValueError: If the quantity isn't positive or the unit is unknown.
    """
    if unit not in TERM_UNITS:
        raise ValueError(f"Unknown term unit: {unit!r}")
    if quantity <= 0:
        raise ValueError(f"Term quantity must be positive: {quantity}")
    unit_form = TERM_UNITS[unit] if quantity == 1 else unit
    return f"{spanish_words(quantity, apocope=True)} ({quantity}) {unit_form}"


def add_months(start: date, months: int) -> date:
    """Add calendar months, clamping to the last day of the target month."""
    years, month_index = divmod(start.month - 1 + months, 12)
    year = start.year + years
    month = month_index + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def termination_date(start: date, quantity: int, unit: str) -> date:
    """Last day of the lease.

    Terms in months or years end the day before the anniversary; terms in
    days end exactly ``quantity`` days after the start.
    """
    if unit not in TERM_UNITS:
        raise ValueError(f"Unknown term unit: {unit!r}")
    if unit == "días":
        return start + timedelta(days=quantity)
    months = quantity if unit == "meses" else quantity * 12
    return add_months(start, months) - timedelta(days=1)


def format_spanish_date(value: date) -> str:
    """Format a date the way the contract prints it: ``"5 de marzo de 2025"``."""
    return f"{value.day} de {MONTHS[value.month - 1]} de {value.year}"


def parse_amount(value: str) -> int | None:
    """Parse an amount typed in the form (``"150.000"``, ``"150000,50"``)."""
    cleaned = re.sub(r"[\s.$]", "", value).split(",")[0]
    if not cleaned.isdigit():
        return None
    return int(cleaned)


def _parse_date(answers: AnswerMap, field: str) -> date | None:
    raw = answers.text(field).strip()
    if not raw:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid date in {field!r}: {raw!r}")
        return None


def derive_answers(answers: AnswerMap, today: date | None = None) -> AnswerMap:
    """Return answers with the form's computed fields filled in.

    Fields that already hold a value are left untouched.
    """
    today = today or date.today()
    updates: dict[str, str] = {}

    def put(field: str, value: str) -> None:
        if not answers.has_value(field):
            updates[field] = value

    for source, target in ((RENT_FIELD, RENT_WORDS_FIELD), (DEPOSIT_FIELD, DEPOSIT_WORDS_FIELD)):
        amount = parse_amount(answers.text(source))
        if amount is not None and amount <= MAX_AMOUNT:
            put(target, number_to_words(amount))

    unit = answers.text(TERM_UNIT_FIELD).strip()
    quantity = parse_amount(answers.text(TERM_QUANTITY_FIELD))
    if unit in TERM_UNITS and quantity:
        start = None
        if answers.text(START_SELECTOR_FIELD) == "Fecha posterior":
            start = _parse_date(answers, CUSTOM_START_FIELD)
        start = start or today
        put(START_DATE_FIELD, format_spanish_date(start))
        try:
            term = term_description(quantity, unit)
            end = termination_date(start, quantity, unit)
        except (ValueError, OverflowError) as e:
            logger.warning(f"Ignoring lease term {quantity} {unit}: {e}")
        else:
            put(TERM_FIELD, term)
            put(END_DATE_FIELD, format_spanish_date(end))

    selector = answers.text(SIGNATURE_SELECTOR_FIELD)
    if selector == "today":
        put(SIGNATURE_DATE_FIELD, format_spanish_date(today))
    elif selector == "next":
        signature = _parse_date(answers, CUSTOM_SIGNATURE_FIELD)
        if signature is not None:
            put(SIGNATURE_DATE_FIELD, format_spanish_date(signature))

    if updates:
        logger.debug(f"Derived answer fields: {sorted(updates)}")
    return answers.merged(updates)
