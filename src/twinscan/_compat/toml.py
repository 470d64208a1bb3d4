from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:  # pragma: no cover - only used on Python < 3.11
    import tomli as tomllib

TOMLDecodeError = tomllib.TOMLDecodeError


def load_tool_table(pyproject: Path, tool: str) -> dict[str, Any]:
    """Return the ``[tool.<tool>]`` table of a pyproject file, or ``{}``."""
    with pyproject.open("rb") as handle:
        data = tomllib.load(handle)
    table = data.get("tool", {}).get(tool, {})
    return table if isinstance(table, dict) else {}
