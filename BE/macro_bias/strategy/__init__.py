"""
Tactical table → validated rows → export.

- build_tactical_table(...)   candidate rows, one per tactical instrument
- validate(row) / validate_rows(rows)   schema gate
- rows_to_frame / rows_to_csv           CSV column contract
"""

from .tactical import build_tactical_table, resolve_universe, lookup_correlation, trend_from_action
from .validator import BiasValidationError, ValidationResult, validate, validate_rows
from .export import CSV_COLUMNS, rows_to_frame, rows_to_csv

__all__ = [
    "build_tactical_table",
    "resolve_universe",
    "lookup_correlation",
    "trend_from_action",
    "BiasValidationError",
    "ValidationResult",
    "validate",
    "validate_rows",
    "CSV_COLUMNS",
    "rows_to_frame",
    "rows_to_csv",
]
