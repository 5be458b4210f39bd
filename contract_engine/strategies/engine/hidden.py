"""Hidden placeholder names.

Hidden placeholders are never shown as a blank marker; they stay invisible
until the form supplies a real answer. The list is data, loaded from a JSON
file, so it can be extended without touching the resolver.
"""

import json
import logging
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_HIDDEN_PLACEHOLDERS_FILE = (
    Path(__file__).resolve().parent.parent.parent / "data" / "hidden_placeholders.json"
)


def load_hidden_placeholders(
    path: str | Path | None = None,
    extra: Iterable[str] = (),
) -> frozenset[str]:
    """Load the hidden placeholder set.

    Args:
        path: JSON file with either a list of names or an object with a
            ``hidden_placeholders`` list. Defaults to the packaged list.
        extra: Additional names to hide.

    Returns:
        The hidden placeholder names.

    Raises:
        FileNotFoundError: If ``path`` doesn't exist.
        ValueError: If the file has an unexpected shape.
    """
    file_path = Path(path) if path else DEFAULT_HIDDEN_PLACEHOLDERS_FILE
    if not file_path.exists():
        raise FileNotFoundError(f"Hidden placeholders file not found: {file_path}")

    data = json.loads(file_path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("hidden_placeholders")
    if not isinstance(data, list):
        raise ValueError(
            f"Invalid hidden placeholders file {file_path}: expected a list of names"
        )

    names = {str(name).strip() for name in data if str(name).strip()}
    names.update(name.strip() for name in extra if name and name.strip())
    logger.debug(f"Loaded {len(names)} hidden placeholders from {file_path}")
    return frozenset(names)
