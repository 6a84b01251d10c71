"""
Rate Sheet Loader (``portfolio_config.loader``).

Responsibility
--------------
Loads YAML rate-sheet files and parses them into typed
``portfolio_config.schema`` dataclass instances.

Invariants enforced
-------------------
* All parse errors raise ``ValueError`` or ``KeyError`` with descriptive
  messages; no silent defaults for required fields.
* Every parsed object is a frozen dataclass from ``schema.py``.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  rate-sheet identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``KeyError`` propagates.
* Non-numeric rate  -> ``ValueError``.
* Non-string currency code (e.g. bare ``NO`` read as a boolean)  -> ``ValueError``.
"""

from __future__ import annotations

import hashlib
import json
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from portfolio_config.schema import RateDef, RateSheet


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the top level is not a mapping.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Rate sheet {path} must be a mapping, got {type(data).__name__}")
    return data


def parse_rate(data: dict[str, Any]) -> RateDef:
    """
    Parse a ``RateDef`` from a dict with ``from``, ``to`` and ``rate`` keys.

    Rates may be written as strings or numbers; numbers go through ``str``
    so ``1.2`` stays ``Decimal("1.2")``.
    """
    raw_rate = data["rate"]
    try:
        rate = Decimal(str(raw_rate))
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Cannot parse rate from {raw_rate!r}") from e

    return RateDef(
        from_currency=_parse_code(data, "from"),
        to_currency=_parse_code(data, "to"),
        rate=rate,
    )


def _parse_code(data: dict[str, Any], field: str) -> str:
    # YAML 1.1 reads bare NO / YES / ON as booleans; quote such codes
    value = data[field]
    if not isinstance(value, str):
        raise ValueError(
            f"'{field}' must be a currency code string, got "
            f"{type(value).__name__} {value!r}"
        )
    return value.strip().upper()


def parse_rate_sheet(data: dict[str, Any]) -> RateSheet:
    """
    Parse a ``RateSheet`` from a dict.

    Raises:
        KeyError: if ``name`` or a rate field is missing.
        ValueError: if ``rates`` is not a list or a rate is not numeric.
    """
    raw_rates = data.get("rates") or []
    if not isinstance(raw_rates, list):
        raise ValueError("'rates' must be a list")

    return RateSheet(
        name=data["name"],
        rates=tuple(parse_rate(r) for r in raw_rates),
        description=data.get("description", ""),
        checksum=compute_checksum(data),
    )


def load_rate_sheet(path: Path | str) -> RateSheet:
    """Load and parse a rate sheet from a YAML file."""
    return parse_rate_sheet(load_yaml_file(Path(path)))


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
