"""Schema validation for built conflict documents, usable as a CLI."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from collections.abc import Mapping
from typing import Any

from jsonschema import Draft202012Validator

from ..config import DEFAULT_OUTPUT_PATH

# conflict values are emitted verbatim, so opaque "||" groups must pass
CONFLICT_DOCUMENT_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["name", "type", "conflict"],
    "properties": {
        "name": {"type": "string", "pattern": r"^[a-z0-9_.-]+/[a-z0-9_.-]+$"},
        "type": {"const": "metapackage"},
        "description": {"type": "string"},
        "license": {"type": "string"},
        "conflict": {
            "type": "object",
            "additionalProperties": {"type": "string", "minLength": 1, "pattern": r"\S"},
        },
    },
}

_VALIDATOR = Draft202012Validator(CONFLICT_DOCUMENT_SCHEMA)


class ConflictDocumentError(ValueError):
    """Raised when a conflict document violates the schema."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = problems
        super().__init__("\n" + "\n".join(f"- {problem}" for problem in problems))


def collect_problems(document: Mapping[str, Any]) -> list[str]:
    """Return one ``<pointer>: <message>`` line per schema violation."""
    problems = []
    for error in sorted(_VALIDATOR.iter_errors(document), key=lambda e: list(e.path)):
        pointer = "/".join(str(part) for part in error.path) or "<root>"
        problems.append(f"{pointer}: {error.message}")
    return problems


def validate_document(document: Mapping[str, Any]) -> None:
    problems = collect_problems(document)
    if problems:
        raise ConflictDocumentError(problems)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--input",
        type=Path,
        default=DEFAULT_OUTPUT_PATH,
        help="Path to the conflict document to validate",
    )
    args = parser.parse_args(argv)

    try:
        document = json.loads(args.input.read_text(encoding="utf-8"))
        validate_document(document)
    except OSError as exc:
        print(f"ERROR: Cannot read {args.input}: {exc}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as exc:
        print(f"ERROR: {args.input} is not JSON: {exc}", file=sys.stderr)
        return 1
    except ConflictDocumentError as exc:
        print(f"ERROR: {args.input} failed validation:{exc}", file=sys.stderr)
        return 1

    print(f"Conflict document {args.input} is valid")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
