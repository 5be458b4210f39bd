"""Clause catalogue check.

Loads the configured clause catalogue and reports circular clause
references, which would make expansion stop at the iteration limit.

Usage:
    python -m scripts.check_clauses
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from contract_engine.core.factory import get_factory


async def main() -> int:
    """Check the catalogue; returns the process exit code."""
    factory = get_factory()
    try:
        catalogue = await factory.get_catalogue_provider().get()
    finally:
        await factory.aclose()

    print(f"{len(catalogue)} clauses for {len(catalogue.names())} placeholders")

    blank = [c for c in catalogue if c.is_blank]
    if blank:
        print(f"{len(blank)} intentionally blank clauses")

    cycles = catalogue.find_cycles()
    if not cycles:
        print("No circular clause references found")
        return 0

    print("Circular clause references:")
    for cycle in cycles:
        print("  " + " -> ".join(cycle))
    return 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
