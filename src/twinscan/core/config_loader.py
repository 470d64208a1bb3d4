from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any

from twinscan._compat.toml import TOMLDecodeError, load_tool_table
from twinscan.core.config import TwinScanConfig
from twinscan.core.errors import ConfigError


def load_config(root: Path, overrides: dict[str, Any] | None = None) -> TwinScanConfig:
    overrides = overrides or {}
    config = TwinScanConfig()
    pyproject = root / "pyproject.toml"
    if pyproject.exists():
        try:
            tool_cfg = load_tool_table(pyproject, "twinscan")
        except TOMLDecodeError as exc:
            raise ConfigError(f"Invalid {pyproject}: {exc}") from exc
        config = _apply_config(config, tool_cfg)
    config = _apply_config(config, overrides)
    return config


def _apply_config(config: TwinScanConfig, cfg: dict[str, Any]) -> TwinScanConfig:
    if not cfg:
        return config
    if "include_globs" in cfg:
        config = replace(config, include_globs=_str_list(cfg["include_globs"], "include_globs"))
    if "exclude_globs" in cfg:
        config = replace(config, exclude_globs=_str_list(cfg["exclude_globs"], "exclude_globs"))
    if "kinds" in cfg:
        kinds = cfg["kinds"]
        if isinstance(kinds, str):
            kinds = [part.strip() for part in kinds.split(",") if part.strip()]
        kinds = _str_list(kinds, "kinds")
        config = replace(config, kinds=kinds or None)
    if "jobs" in cfg:
        config = replace(config, jobs=_int(cfg["jobs"], "jobs"))
    if "progress" in cfg:
        config = replace(config, progress=bool(cfg["progress"]))
    if "thresholds" in cfg:
        t = _table(cfg["thresholds"], "thresholds")
        current = config.thresholds
        extract_min_lines = t.get("extract_min_lines", current.extract_min_lines)
        config = replace(
            config,
            thresholds=replace(
                current,
                min_group_size=_int(
                    t.get("min_group_size", current.min_group_size), "thresholds.min_group_size"
                ),
                min_tokens=_int(t.get("min_tokens", current.min_tokens), "thresholds.min_tokens"),
                min_lines=_int(t.get("min_lines", current.min_lines), "thresholds.min_lines"),
                extract_min_lines=None
                if extract_min_lines is None
                else _int(extract_min_lines, "thresholds.extract_min_lines"),
            ),
        )
    if "report" in cfg:
        r = _table(cfg["report"], "report")
        config = replace(
            config,
            report=replace(
                config.report,
                top=_int(r.get("top", config.report.top), "report.top"),
                preview_lines=_int(
                    r.get("preview_lines", config.report.preview_lines), "report.preview_lines"
                ),
            ),
        )
    return config


def _int(value: Any, key: str) -> int:
    # bool is an int subclass; ``top = true`` is still a mistake.
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{key} must be an integer, got {value!r}") from exc


def _table(value: Any, key: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ConfigError(f"{key} must be a table, got {value!r}")
    return value


def _str_list(value: Any, key: str) -> list[str]:
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ConfigError(f"{key} must be a list of strings, got {value!r}")
    if not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{key} must be a list of strings, got {value!r}")
    return list(value)
