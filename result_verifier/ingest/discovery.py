from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional


_BOOL_TRUE = {"true", "1", "yes", "on"}
_BOOL_FALSE = {"false", "0", "no", "off"}


def parse_bool(v: Optional[str], default: bool = False) -> bool:
    """Lenient boolean flag parsing; raises ValueError on unknown words."""
    if v is None:
        return default
    vv = v.strip().lower()
    if vv in _BOOL_TRUE:
        return True
    if vv in _BOOL_FALSE:
        return False
    raise ValueError(f"not a boolean flag: {v!r}")


@dataclass(frozen=True)
class ResultFilePair:
    """
    One result file name and the three files it is checked with.

    candidate_path: computed result
    reference_path: expected result of the same name
    schema_path:    column schema of the same name
    """
    name: str
    candidate_path: Path
    reference_path: Path
    schema_path: Path


def require_directory(path: str | Path) -> Path:
    p = Path(path).expanduser()
    if not p.exists():
        raise FileNotFoundError(f"{path}: no such file or directory")
    if not p.is_dir():
        raise NotADirectoryError(f"{path}: not a directory")
    return p


def list_result_files(directory: str | Path, *, include_hidden: bool = False) -> List[str]:
    """
    Names of the regular files directly inside ``directory``, sorted.

    Dot-prefixed names are skipped unless ``include_hidden``.
    """
    root = require_directory(directory)
    names = []
    for p in root.iterdir():
        if not p.is_file():
            continue
        if not include_hidden and p.name.startswith("."):
            continue
        names.append(p.name)
    return sorted(names)


def resolve_pair(
    name: str,
    candidate_dir: str | Path,
    reference_dir: str | Path,
    schema_dir: str | Path,
) -> ResultFilePair:
    """Locate the same-named candidate, reference and schema files; missing ones raise FileNotFoundError."""
    pair = ResultFilePair(
        name=name,
        candidate_path=Path(candidate_dir) / name,
        reference_path=Path(reference_dir) / name,
        schema_path=Path(schema_dir) / name,
    )
    for p in (pair.schema_path, pair.candidate_path, pair.reference_path):
        if not p.is_file():
            raise FileNotFoundError(f"{p}: no such file or directory")
    return pair
