"""Form answer snapshot used for one resolution pass."""

import logging
from collections.abc import Iterator, Mapping, Sequence
from typing import Any

logger = logging.getLogger(__name__)

AFFIRMATIVE = "si"
NEGATIVE = "no"

AnswerValue = str | bool | None


class AnswerMap(Mapping[str, AnswerValue]):
    """Immutable mapping of form field name to answer value.

    Booleans are stored as the affirmative/negative sentinels the contract
    templates and clause catalogue use. Numbers are stored as strings.
    """

    def __init__(
        self,
        values: Mapping[str, Any] | None = None,
        affirmative: str = AFFIRMATIVE,
        negative: str = NEGATIVE,
    ) -> None:
        self._affirmative = affirmative
        self._negative = negative
        self._values: dict[str, AnswerValue] = {}
        for key, value in (values or {}).items():
            self._values[str(key)] = self._normalize(value)

    def _normalize(self, value: Any) -> AnswerValue:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, bool):
            return self._affirmative if value else self._negative
        return str(value)

    @classmethod
    def from_row(
        cls,
        headers: Sequence[str],
        row: Sequence[Any] | Mapping[str, Any],
        **kwargs: Any,
    ) -> "AnswerMap":
        """Build an answer map from a stored draft row.

        Args:
            headers: Column names, one per placeholder.
            row: Either the row values in header order or a mapping keyed by
                header name (the shape the document-generation webhook posts).

        Returns:
            AnswerMap restricted to the given headers; missing cells are absent.
        """
        values: dict[str, Any] = {}
        if isinstance(row, Mapping):
            for header in headers:
                if header in row and row[header] is not None:
                    values[header] = row[header]
        else:
            for idx, header in enumerate(headers):
                if idx < len(row) and row[idx] is not None:
                    values[header] = row[idx]
        logger.debug(f"Built answer map with {len(values)} of {len(headers)} headers")
        return cls(values, **kwargs)

    def __getitem__(self, key: str) -> AnswerValue:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"AnswerMap({self._values!r})"

    def text(self, name: str) -> str:
        """Return the answer as text, or an empty string when absent or blank."""
        value = self._values.get(name)
        if value is None:
            return ""
        value = str(value)
        return value if value.strip() else ""

    def has_value(self, name: str) -> bool:
        """Whether the field has a non-empty answer."""
        return bool(self.text(name))

    def is_affirmative(self, name: str) -> bool:
        """Whether the field holds the affirmative sentinel (case-insensitive)."""
        return self.text(name).strip().lower() == self._affirmative.lower()

    @property
    def affirmative(self) -> str:
        return self._affirmative

    def merged(self, updates: Mapping[str, Any]) -> "AnswerMap":
        """Return a new map with ``updates`` applied on top of these answers."""
        values: dict[str, Any] = dict(self._values)
        values.update(updates)
        return AnswerMap(values, affirmative=self._affirmative, negative=self._negative)
