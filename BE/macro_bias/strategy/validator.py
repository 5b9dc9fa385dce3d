# BE/macro_bias/strategy/validator.py
"""
Schema gate for tactical rows. Every row handed to a consumer passes here.

Rules
-----
• trend_final / action_final / confidence_level must be enum members
  (enum instances or their exact string values).
• symbol, motivo_macro and corr_ref must be non-empty strings.
• corr_12m / corr_3m: None → 0.0; NaN, ±inf and non-numeric values fail.

`validate` never raises; it returns a `ValidationResult`. Call `.unwrap()`
to get the row or a `BiasValidationError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Type, TypeVar, Union, cast

import numpy as np

from ..models import ActionFinal, ConfidenceLevel, MacroBiasError, TacticalBiasRow, TrendFinal

LOG = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

# snake_case field → accepted aliases in loosely typed mappings
_FIELD_ALIASES = {
    "symbol": ("symbol", "par", "pair"),
    "trend_final": ("trend_final", "trendFinal", "tactico"),
    "action_final": ("action_final", "actionFinal", "accion"),
    "confidence_level": ("confidence_level", "confidenceLevel", "confianza"),
    "motivo_macro": ("motivo_macro", "motivoMacro", "motivo"),
    "corr_ref": ("corr_ref", "corrRef"),
    "corr_12m": ("corr_12m", "corr12m"),
    "corr_3m": ("corr_3m", "corr3m"),
}


class BiasValidationError(MacroBiasError, ValueError):
    def __init__(self, errors: Tuple[str, ...], symbol: str = "") -> None:
        self.errors = tuple(errors)
        self.symbol = symbol
        where = f" for {symbol}" if symbol else ""
        super().__init__(f"Invalid tactical row{where}: " + "; ".join(self.errors))


@dataclass(frozen=True)
class ValidationResult:
    row: Optional[TacticalBiasRow]
    errors: Tuple[str, ...] = ()
    symbol: str = ""

    @property
    def ok(self) -> bool:
        return self.row is not None and not self.errors

    def unwrap(self) -> TacticalBiasRow:
        if not self.ok:
            raise BiasValidationError(self.errors, self.symbol)
        return cast(TacticalBiasRow, self.row)


def _field(row: Union[TacticalBiasRow, Mapping[str, Any]], name: str) -> Any:
    if isinstance(row, TacticalBiasRow):
        return getattr(row, name)
    for alias in _FIELD_ALIASES[name]:
        if alias in row:
            return row[alias]
    return None


def _enum(cls: Type[E], raw: Any, name: str, errors: List[str]) -> Optional[E]:
    if isinstance(raw, cls):
        return raw
    if isinstance(raw, str):
        for member in cls:
            if member.value == raw:
                return member
    errors.append(f"{name}: {raw!r} is not one of {[m.value for m in cls]}")
    return None


def _text(raw: Any, name: str, errors: List[str]) -> str:
    if not isinstance(raw, str) or not raw.strip():
        errors.append(f"{name}: must be a non-empty string")
        return ""
    return raw


def _corr(raw: Any, name: str, errors: List[str]) -> float:
    if raw is None:
        return 0.0
    if isinstance(raw, bool):
        errors.append(f"{name}: boolean is not a correlation")
        return 0.0
    try:
        v = float(raw)
    except (TypeError, ValueError):
        errors.append(f"{name}: {raw!r} is not numeric")
        return 0.0
    if not np.isfinite(v):
        errors.append(f"{name}: non-finite value {raw!r}")
        return 0.0
    return v


def validate(row: Any) -> ValidationResult:
    if not isinstance(row, (TacticalBiasRow, Mapping)):
        return ValidationResult(None, (f"row: expected TacticalBiasRow or mapping, got {type(row).__name__}",))

    errors: List[str] = []
    symbol = _text(_field(row, "symbol"), "symbol", errors)
    trend = _enum(TrendFinal, _field(row, "trend_final"), "trend_final", errors)
    action = _enum(ActionFinal, _field(row, "action_final"), "action_final", errors)
    confidence = _enum(ConfidenceLevel, _field(row, "confidence_level"), "confidence_level", errors)
    motivo = _text(_field(row, "motivo_macro"), "motivo_macro", errors)
    corr_ref = _text(_field(row, "corr_ref"), "corr_ref", errors)
    c12 = _corr(_field(row, "corr_12m"), "corr_12m", errors)
    c3 = _corr(_field(row, "corr_3m"), "corr_3m", errors)

    if errors:
        return ValidationResult(None, tuple(errors), symbol)
    return ValidationResult(
        TacticalBiasRow(
            symbol=symbol,
            trend_final=trend,  # type: ignore[arg-type]
            action_final=action,  # type: ignore[arg-type]
            confidence_level=confidence,  # type: ignore[arg-type]
            motivo_macro=motivo,
            corr_ref=corr_ref,
            corr_12m=c12,
            corr_3m=c3,
        ),
        (),
        symbol,
    )


def validate_rows(rows: Iterable[Any]) -> Tuple[List[TacticalBiasRow], List[ValidationResult]]:
    """(accepted rows, failed results); input order kept in both lists."""
    accepted: List[TacticalBiasRow] = []
    failures: List[ValidationResult] = []
    for row in rows:
        result = validate(row)
        if result.ok:
            accepted.append(result.row)  # type: ignore[arg-type]
        else:
            LOG.debug("Row rejected %s: %s", result.symbol or "?", result.errors)
            failures.append(result)
    return accepted, failures
