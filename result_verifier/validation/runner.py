"""Result verification runner - reusable API for checking result directories.

This module provides:
1. Verification of one result file pair (candidate vs reference, with its schema)
2. Verification of a whole candidate directory against reference and schema directories
3. A per-file summary table and its export with provenance metadata

Design goals:
- One file's failure never stops the run: every error is captured at the
  file-pair boundary and recorded in a :class:`FileVerdict`
- Nothing here prints; the command line decides what to show
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from result_verifier.analysis.records import compare_record_streams
from result_verifier.ingest.byte_source import ByteSource
from result_verifier.ingest.discovery import (
    ResultFilePair,
    list_result_files,
    require_directory,
    resolve_pair,
)
from result_verifier.ingest.schema_parser import load_schema
from result_verifier.ingest.tokenizer import FieldTokenizer, TokenizerConfig
from result_verifier.models.errors import VerificationError


@dataclass(frozen=True)
class VerificationConfig:
    """
    Settings of one verification run.

    skip_header:
      both candidate and reference files start with a header line to ignore.
    tolerance:
      relative tolerance in percent for decimal columns (0 = exact).
    include_hidden:
      also verify dot-prefixed files of the candidate directory.
    field_delimiter / record_delimiter / encoding:
      result file layout, see :class:`TokenizerConfig`.
    """
    skip_header: bool = True
    tolerance: float = 0.0
    include_hidden: bool = False
    field_delimiter: str = "\t"
    record_delimiter: str = "\n"
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        if not np.isfinite(self.tolerance) or self.tolerance < 0:
            raise ValueError(f"tolerance must be a finite percentage >= 0, got {self.tolerance}")
        # Fail early on bad delimiters rather than per file.
        self.tokenizer_config()

    def tokenizer_config(self) -> TokenizerConfig:
        return TokenizerConfig(
            field_delimiter=self.field_delimiter,
            record_delimiter=self.record_delimiter,
            skip_header=self.skip_header,
            encoding=self.encoding,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> VerificationConfig:
        return cls(**d)


@dataclass(frozen=True)
class FileVerdict:
    """Outcome of verifying one result file.

    ``columns`` holds the schema in schema-file syntax, one entry per column,
    when the schema could be loaded.
    """

    name: str
    ok: bool
    records: int = 0
    error_kind: Optional[str] = None
    message: Optional[str] = None
    source: Optional[str] = None
    line: Optional[int] = None
    column: Optional[str] = None
    columns: Tuple[str, ...] = ()


@dataclass
class VerificationReport:
    """All verdicts of one directory run."""

    candidate_dir: Path
    reference_dir: Path
    schema_dir: Path
    config: VerificationConfig
    verdicts: List[FileVerdict] = field(default_factory=list)
    warnings: Tuple[str, ...] = ()

    @property
    def n_failed(self) -> int:
        return sum(1 for v in self.verdicts if not v.ok)

    @property
    def n_passed(self) -> int:
        return len(self.verdicts) - self.n_failed

    @property
    def ok(self) -> bool:
        return self.n_failed == 0

    def to_frame(self) -> pd.DataFrame:
        cols = ["name", "ok", "records", "error_kind", "message", "source", "line", "column"]
        return pd.DataFrame([asdict(v) for v in self.verdicts], columns=cols)


def verify_file_pair(pair: ResultFilePair, config: Optional[VerificationConfig] = None) -> FileVerdict:
    """
    Verify one candidate file against its reference, stopping at the first error.

    Parameters
    ----------
    pair : ResultFilePair
        Candidate, reference and schema paths of one result name
    config : VerificationConfig, optional
        Defaults to ``VerificationConfig()``

    Returns
    -------
    FileVerdict
        ``ok`` with the number of records compared, or the first error found
    """
    cfg = config or VerificationConfig()
    tcfg = cfg.tokenizer_config()
    columns: Tuple[str, ...] = ()
    candidate: Optional[FieldTokenizer] = None
    try:
        schema = load_schema(pair.schema_path, encoding=cfg.encoding)
        columns = tuple(c.describe() for c in schema)
        with ByteSource.open(pair.candidate_path) as c_src, ByteSource.open(pair.reference_path) as r_src:
            candidate = FieldTokenizer(c_src, tcfg)
            reference = FieldTokenizer(r_src, tcfg)
            n_records = compare_record_streams(schema, candidate, reference, cfg.tolerance)
    except VerificationError as e:
        return FileVerdict(
            name=pair.name,
            ok=False,
            records=candidate.records if candidate is not None else 0,
            error_kind=e.kind,
            message=str(e),
            source=e.source,
            line=e.line,
            column=e.column,
            columns=columns,
        )
    except OSError as e:
        return FileVerdict(name=pair.name, ok=False, error_kind="io", message=str(e), columns=columns)
    return FileVerdict(name=pair.name, ok=True, records=n_records, columns=columns)


def verify_directories(
    candidate_dir: str | Path,
    reference_dir: str | Path,
    schema_dir: str | Path,
    config: Optional[VerificationConfig] = None,
    *,
    on_verdict: Optional[Callable[[FileVerdict], None]] = None,
) -> VerificationReport:
    """
    Verify every result file of ``candidate_dir`` against the same-named files
    of ``reference_dir`` and ``schema_dir``.

    A missing directory raises FileNotFoundError before anything is verified.
    A missing partner file only fails that file (``error_kind="missing"``).
    ``on_verdict`` is called after each file, in verification order.
    """
    cfg = config or VerificationConfig()
    dirs = [require_directory(d) for d in (candidate_dir, reference_dir, schema_dir)]

    warnings: List[str] = []
    names = list_result_files(dirs[0], include_hidden=cfg.include_hidden)
    if not names:
        warnings.append("no input files")

    verdicts: List[FileVerdict] = []
    for name in names:
        try:
            pair = resolve_pair(name, *dirs)
        except FileNotFoundError as e:
            verdict = FileVerdict(name=name, ok=False, error_kind="missing", message=str(e))
        else:
            verdict = verify_file_pair(pair, cfg)
        verdicts.append(verdict)
        if on_verdict is not None:
            on_verdict(verdict)

    return VerificationReport(
        candidate_dir=dirs[0],
        reference_dir=dirs[1],
        schema_dir=dirs[2],
        config=cfg,
        verdicts=verdicts,
        warnings=tuple(warnings),
    )


def export_report(
    report: VerificationReport,
    output_path: str | Path,
    *,
    write_sidecar_json: bool = True,
) -> Path:
    """Export the per-file summary to CSV with an optional provenance sidecar.

    Parameters
    ----------
    report : VerificationReport
        Report returned by :func:`verify_directories`
    output_path : Path
        CSV file to write; the sidecar uses the same name with ``.json``
    write_sidecar_json : bool
        If True, write directories, configuration, totals and per-file schemas next to the CSV

    Returns
    -------
    Path
        Path to the written CSV file
    """
    output_path = Path(output_path)
    if output_path.suffix.lower() == ".json":
        raise ValueError(f"report must be a CSV file, got {output_path}")
    output_path.parent.mkdir(parents=True, exist_ok=True)

    report.to_frame().to_csv(output_path, index=False)

    if write_sidecar_json:
        metadata = {
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "candidate_dir": str(report.candidate_dir),
            "reference_dir": str(report.reference_dir),
            "schema_dir": str(report.schema_dir),
            "config": report.config.to_dict(),
            "n_files": len(report.verdicts),
            "n_passed": report.n_passed,
            "n_failed": report.n_failed,
            "warnings": list(report.warnings),
            "schemas": {v.name: list(v.columns) for v in report.verdicts if v.columns},
        }
        with open(output_path.with_suffix(".json"), "w") as f:
            json.dump(metadata, f, indent=2, default=str)

    return output_path
