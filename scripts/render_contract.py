"""Contract rendering script.

Renders the configured Word template with answers read from a JSON file.
The file may hold a flat answer object or the draft-row shape
``{"contractData": {...}, "headers": [...]}``.

Usage:
    python -m scripts.render_contract answers.json [--output contrato.docx]
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from contract_engine.core.config import get_settings
from contract_engine.core.factory import ComponentFactory
from contract_engine.strategies.engine import AnswerMap, derive_answers


def load_answers(path: Path, affirmative: str) -> AnswerMap:
    """Read answers from a JSON file."""
    payload = json.loads(path.read_text(encoding="utf-8"))
    if "contractData" in payload and "headers" in payload:
        answers = AnswerMap.from_row(
            payload["headers"], payload["contractData"], affirmative=affirmative
        )
    else:
        answers = AnswerMap(payload, affirmative=affirmative)
    return derive_answers(answers)


async def main(answers_file: Path, output: str | None) -> None:
    """Render one contract."""
    settings = get_settings()
    factory = ComponentFactory(settings)
    try:
        catalogue = await factory.get_catalogue_provider().get()
        answers = load_answers(answers_file, settings.affirmative_value)
        rendered = await factory.get_template_renderer().render(
            str(settings.template_path), catalogue, answers, output_path=output
        )
    finally:
        await factory.aclose()

    print(f"Contract saved: {rendered.path}")
    print(f"Title: {rendered.title}")
    for name, report in rendered.sections.items():
        print(
            f"  {name}: {len(report['clauses_applied'])} clauses, "
            f"{len(report['substituted'])} placeholders, logo={report['logo_status']}"
        )


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Render a contract from answers")
    parser.add_argument("answers", type=Path, help="JSON file with form answers")
    parser.add_argument("--output", default=None, help="Output .docx path")
    args = parser.parse_args()
    asyncio.run(main(args.answers, args.output))
