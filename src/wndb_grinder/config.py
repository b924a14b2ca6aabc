"""
YAML configuration of a grind run.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from wndb_grinder.exceptions import ConfigError
from wndb_grinder.flags import Flags
from wndb_grinder.formatter import HEADERS


@dataclass
class GrindConfig:
    """Settings of a grind run."""

    source: Optional[Path] = None
    output: Path = Path("wndb")
    lexicon: Optional[str] = None
    compat: Tuple[str, ...] = ()
    reindex: bool = True
    legacy_order: Optional[Path] = None
    header: str = "oewn"
    upper_case_first: bool = True
    verbose: bool = False

    @property
    def flags(self) -> Flags:
        flags = Flags.parse(self.compat)
        if not self.reindex:
            flags |= Flags.NO_REINDEX
        return flags

    @property
    def header_text(self) -> str:
        return HEADERS[self.header]


def load_config(
    source: Union[str, Path, Dict[str, Any]],
) -> GrindConfig:
    """Load a grind configuration from a YAML file or dictionary.

    Args:
        source: Path to YAML file, YAML string, or parsed dictionary

    Returns:
        GrindConfig object

    Raises:
        ConfigError: If the configuration cannot be parsed or is invalid
        FileNotFoundError: If the file does not exist
    """
    source_path: Optional[Path] = None

    if isinstance(source, dict):
        data = source
    elif isinstance(source, Path) or (isinstance(source, str) and _is_file_path(source)):
        source_path = Path(source)
        if not source_path.exists():
            raise FileNotFoundError(f"File not found: {source_path}")
        with open(source_path, "r", encoding="utf-8") as f:
            data = _safe_load(f)
    else:
        # Assume it's a YAML string
        data = _safe_load(source)

    return _parse_config(data, source_path)


def _is_file_path(s: str) -> bool:
    """Check if a string looks like a file path."""
    if "\n" in s or ": " in s:
        return False
    if "/" in s or "\\" in s:
        return True
    return s.endswith((".yaml", ".yml"))


def _safe_load(stream: Any) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(stream)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        line_num = mark.line + 1 if mark else None
        raise ConfigError(f"Invalid YAML: {e}", line=line_num) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("YAML root must be a mapping (dictionary)")
    return data


def _parse_config(
    data: Dict[str, Any],
    source_path: Optional[Path] = None,
) -> GrindConfig:
    """Parse a dictionary into a GrindConfig object."""
    known = {f.name for f in fields(GrindConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    # Relative paths are relative to the configuration file
    base = source_path.parent if source_path is not None else None

    compat = data.get("compat") or []
    if isinstance(compat, str):
        compat = [compat]
    if not isinstance(compat, list) or not all(isinstance(c, str) for c in compat):
        raise ConfigError("Field 'compat' must be a list of names")
    # Validate names early
    Flags.parse(compat)

    header = data.get("header", "oewn")
    if header not in HEADERS:
        raise ConfigError(
            f"Field 'header' must be one of {', '.join(sorted(HEADERS))}, got {header!r}"
        )

    lexicon = data.get("lexicon")
    if lexicon is not None and not isinstance(lexicon, str):
        raise ConfigError("Field 'lexicon' must be a string")

    return GrindConfig(
        source=_path(data, "source", base),
        output=_path(data, "output", base) or Path("wndb"),
        lexicon=lexicon,
        compat=tuple(c.strip().lower() for c in compat),
        reindex=_bool(data, "reindex", True),
        legacy_order=_path(data, "legacy_order", base),
        header=header,
        upper_case_first=_bool(data, "upper_case_first", True),
        verbose=_bool(data, "verbose", False),
    )


def _path(data: Dict[str, Any], key: str, base: Optional[Path]) -> Optional[Path]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"Field '{key}' must be a path")
    path = Path(value).expanduser()
    if base is not None and not path.is_absolute():
        path = base / path
    return path


def _bool(data: Dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"Field '{key}' must be true or false")
    return value
