#!/usr/bin/env python3
"""Local entrypoint to build the conflict document without installing the package.

Usage:
  python scripts/build_conflicts.py --source advisories.jsonl [--output build/composer.json]
"""

from __future__ import annotations

import sys
from pathlib import Path

_SRC = Path(__file__).resolve().parents[1] / "src"
if _SRC.exists() and str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from security_advisories.cli import main  # noqa: E402

if __name__ == "__main__":
    raise SystemExit(main())
