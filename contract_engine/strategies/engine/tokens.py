"""Placeholder token scanning.

A token is a ``{{name}}`` marker with no nested braces inside.
"""

import re
from collections.abc import Callable, Iterator, Mapping

TOKEN_PATTERN = re.compile(r"{{([^{}]+)}}")


def make_token(name: str) -> str:
    """Return the ``{{name}}`` marker for a placeholder name."""
    return f"{{{{{name}}}}}"


def iter_tokens(text: str) -> Iterator[str]:
    """Yield token names in document order, repeats included."""
    for match in TOKEN_PATTERN.finditer(text):
        yield match.group(1)


def scan_tokens(text: str) -> set[str]:
    """Return the unique token names found in ``text``."""
    return set(iter_tokens(text))


def ordered_tokens(text: str) -> list[str]:
    """Return unique token names in order of first appearance."""
    return list(dict.fromkeys(iter_tokens(text)))


def replace_tokens(text: str, replacements: Mapping[str, str]) -> str:
    """Build a new string with every token in ``replacements`` substituted.

    Tokens not present in ``replacements`` are kept as they are. Replacement
    text is not rescanned within the same call.
    """
    if not replacements:
        return text
    return TOKEN_PATTERN.sub(lambda m: replacements.get(m.group(1), m.group(0)), text)


def map_tokens(text: str, func: Callable[[str], str]) -> str:
    """Replace every token with ``func(name)``."""
    return TOKEN_PATTERN.sub(lambda m: func(m.group(1)), text)


def strip_tokens(text: str) -> str:
    """Remove every token marker from ``text``.

    Repeats until no marker is left, since removing an inner marker can
    join the braces around it into a new one (``{{a{{b}}}}``).
    """
    while True:
        stripped = TOKEN_PATTERN.sub("", text)
        if stripped == text:
            return text
        text = stripped
