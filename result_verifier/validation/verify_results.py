from __future__ import annotations

import sys
from typing import Optional, Sequence

from result_verifier.ingest.discovery import parse_bool
from result_verifier.validation.runner import (
    FileVerdict,
    VerificationConfig,
    export_report,
    verify_directories,
)


def _print_verdict(verdict: FileVerdict) -> None:
    print(f"[info] {verdict.name}")
    if not verdict.ok:
        print(f"[error] {verdict.message}", file=sys.stderr)
        print("[warn] skipping file after first error", file=sys.stderr)


def main(argv: Optional[Sequence[str]] = None) -> int:
    import argparse
    import textwrap

    p = argparse.ArgumentParser(
        prog="verify-results",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=textwrap.dedent(
            """\
            Verify computed result files against reference result files.

            Every regular file of CANDIDATE_DIR is compared with the same-named file
            of REFERENCE_DIR, interpreting fields with the same-named schema file of
            SCHEMA_DIR. Each file stops at its first error; the run continues with
            the next file.
            """
        ),
    )
    p.add_argument("candidate_dir", help="Directory with the computed result files")
    p.add_argument("reference_dir", help="Directory with the expected result files")
    p.add_argument("schema_dir", help="Directory with one schema definition per result file")
    p.add_argument(
        "skip_header",
        nargs="?",
        default="true",
        help="Whether result files start with a header line to ignore (true/false, default true)",
    )
    p.add_argument(
        "tolerance",
        nargs="?",
        type=float,
        default=0.0,
        help="Relative tolerance in percent for decimal columns (default 0 = exact)",
    )
    p.add_argument("--include-hidden", action="store_true", help="Also verify dot-prefixed files")
    p.add_argument("--report", default=None, help="Write a per-file CSV summary (+ JSON sidecar) to this path")

    ns = p.parse_args(list(argv) if argv is not None else None)

    try:
        cfg = VerificationConfig(
            skip_header=parse_bool(ns.skip_header),
            tolerance=float(ns.tolerance),
            include_hidden=bool(ns.include_hidden),
        )
    except ValueError as e:
        p.error(str(e))

    try:
        report = verify_directories(
            ns.candidate_dir,
            ns.reference_dir,
            ns.schema_dir,
            cfg,
            on_verdict=_print_verdict,
        )
    except (FileNotFoundError, NotADirectoryError) as e:
        print(str(e), file=sys.stderr)
        return 2

    for w in report.warnings:
        print(f"[warn] {w}", file=sys.stderr)

    if ns.report:
        out = export_report(report, ns.report)
        print(f"[info] wrote report: {out}")

    print(f"[info] verified {len(report.verdicts)} file(s): {report.n_passed} passed, {report.n_failed} failed")
    return 0 if report.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
