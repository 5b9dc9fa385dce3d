"""
Ingestion boundary: loosely typed provider rows → typed entities.

- build_correlation_map(rows) -> CorrelationMap
- parse_indicator(row) / parse_indicators(rows) -> tagged parse results
"""

from .correlations import CorrelationMap, build_correlation_map, parse_correlation_row
from .indicators import (
    ParsedIndicator,
    RejectedIndicator,
    parse_indicator,
    parse_indicators,
)

__all__ = [
    "CorrelationMap",
    "build_correlation_map",
    "parse_correlation_row",
    "ParsedIndicator",
    "RejectedIndicator",
    "parse_indicator",
    "parse_indicators",
]
