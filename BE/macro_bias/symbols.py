# BE/macro_bias/symbols.py
"""
symbols.py
──────────
Instrument identifier normalization.

Providers spell the same instrument many ways ("EUR/USD", "eurusd", "EURUSD").
Everything internal is keyed by the canonical form: alphanumerics only, upper
case. `variants()` enumerates the surface forms a lookup should try.

All functions are pure and total: garbage in gives an empty or unmatched
canonical form, never an exception.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional, Set, Tuple

from .config import load_tactical_pairs

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")

# The fixed set of forex pairs the system reasons about.
FOREX_WHITELIST: Tuple[str, ...] = (
    "EURUSD", "GBPUSD", "USDJPY", "USDCHF", "AUDUSD", "USDCAD",
    "NZDUSD", "EURGBP", "EURJPY", "GBPJPY", "EURCHF", "AUDJPY",
)


def normalize(symbol: object) -> str:
    """'eur/usd' -> 'EURUSD'. Non-string input normalizes to ''."""
    if not isinstance(symbol, str):
        return ""
    return _NON_ALNUM.sub("", symbol).upper()


def variants(symbol: object) -> Set[str]:
    """
    Canonical form, its lower-case form and, for 3+3 pairs, the slash form in
    both cases. Empty input yields an empty set.
    """
    canon = normalize(symbol)
    if not canon:
        return set()
    out = {canon, canon.lower()}
    if len(canon) == 6:
        slash = f"{canon[:3]}/{canon[3:]}"
        out.add(slash)
        out.add(slash.lower())
    return out


def ordered_variants(symbol: object) -> Tuple[str, ...]:
    """`variants()` in a fixed lookup order: canonical, slash, lower, slash-lower."""
    canon = normalize(symbol)
    if not canon:
        return ()
    order = [canon]
    if len(canon) == 6:
        order.append(f"{canon[:3]}/{canon[3:]}")
    order.append(canon.lower())
    if len(canon) == 6:
        order.append(f"{canon[:3]}/{canon[3:]}".lower())
    return tuple(order)


def split_pair(symbol: object) -> Tuple[Optional[str], Optional[str]]:
    """'EUR/USD' -> ('EUR', 'USD'); anything that is not 3+3 letters -> (None, None)."""
    canon = normalize(symbol)
    if len(canon) != 6 or not canon.isalpha():
        return None, None
    return canon[:3], canon[3:]


def to_display(symbol: object) -> str:
    """Slash form for 3+3 pairs ('EUR/USD'); canonical form otherwise."""
    canon = normalize(symbol)
    if len(canon) == 6 and canon.isalpha():
        return f"{canon[:3]}/{canon[3:]}"
    return canon


def is_forex_whitelisted(symbol: object) -> bool:
    return normalize(symbol) in FOREX_WHITELIST


def is_whitelisted(symbol: object, tactical: Optional[Iterable[str]] = None) -> bool:
    """
    True when the symbol is one of the 12 whitelisted forex pairs or belongs
    to the tactical instrument list (configured universe unless given).
    """
    canon = normalize(symbol)
    if not canon:
        return False
    if canon in FOREX_WHITELIST:
        return True
    if tactical is None:
        tactical = (p.symbol for p in load_tactical_pairs())
    return canon in {normalize(s) for s in tactical}
