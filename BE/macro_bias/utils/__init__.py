# BE/macro_bias/utils/__init__.py
"""
Small cross-cutting helpers shared across the package.

    from macro_bias.utils import get_logger, read_yaml, format_signed_two_decimals

Nothing here should import domain modules (symbols, scoring, strategy...).
"""

from .logging import get_logger
from .io import read_yaml, read_json
from .format import format_signed_two_decimals, display_trend, display_action, usd_label

__all__ = [
    # logging
    "get_logger",
    # io
    "read_yaml",
    "read_json",
    # display
    "format_signed_two_decimals",
    "display_trend",
    "display_action",
    "usd_label",
]
