# BE/macro_bias/utils/io.py
"""
Lightweight file readers for the config layer.
- YAML (PyYAML safe_load) and JSON loaders
- Missing files read as the caller's default; parse errors propagate

No runtime dependency on the rest of the package.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import yaml


def read_yaml(path: Path | str) -> Dict[str, Any]:
    """
    Load a YAML file into a dict. Returns {} if the file is missing or empty.
    """
    p = Path(path)
    if not p.exists():
        return {}
    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if isinstance(data, dict):
        return data
    # allow top-level lists; wrap for callers expecting dict-like
    return {"_": data}


def read_json(path: Path | str, default: Any = None) -> Any:
    p = Path(path)
    if not p.exists():
        return default
    with p.open("r", encoding="utf-8") as f:
        return json.load(f)
