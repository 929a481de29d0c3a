"""Verification runner.

This package contains the *non-interactive* tooling that drives whole
verification runs.

Design goals
------------
1) Keep the per-type comparison logic out of the driver (no I/O in ``analysis``).
2) Make runs reproducible and scriptable (CLI-style entry point, exported report).
3) Report every file, even when earlier files failed.
"""
