"""Result Verifier -- type-aware checking of computed result files against reference results.

A data-processing job writes tab-separated result files; a reference run wrote
the expected ones. This package checks that both agree, field by field, using a
per-file column schema so every value is compared with the semantics of its
declared type instead of as opaque text.

This package provides tools for:
- Parsing the line-oriented schema definitions into typed column descriptors
- Tokenizing memory-mapped result files into fields and records
- Comparing integers, dates, bounded strings and fixed-precision decimals,
  optionally with a relative tolerance on decimals
- Verifying whole directories of result files and exporting a summary report

Key principles:
- Blame the right file: malformed values are attributed to the candidate or
  the reference side, with file name, line and column
- Stop at the first discrepancy of a file, never at the first failing file
- Schemas are immutable once parsed and shared across every record of a file pair

Main subpackages:
- models: Column descriptors, tokenizer outcomes, error hierarchy
- ingest: Byte sources, field tokenizer, schema parser, file discovery
- analysis: Fixed-point decimals, per-field and per-record comparison
- validation: File-pair / directory runner, report export, command line
"""

__all__ = []
