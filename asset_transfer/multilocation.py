"""
Multi-location strings: parsing, normalization and canonical form.

Callers pass foreign assets as JSON strings in the polkadot-js shape,
e.g. ``{"parents":"1","interior":{"X2":[{"Parachain":"2,125"},{"GeneralIndex":"0"}]}}``.
Two strings name the same location when their canonical forms match:

    - Keys sorted (recursive), no whitespace, UTF-8.
    - Numbers rendered as strings; thousands separators removed.
"""

from __future__ import annotations

import json
import re
from typing import Any

from asset_transfer.errors import ErrorKind, TransferError

_NUMERIC_RE = re.compile(r"^\d{1,3}(,\d{3})+$|^\d+$")


def canonical_json(obj: Any) -> str:
    """Serialize to canonical JSON: sorted keys, compact separators."""
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )


def _normalize(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        stripped = value.strip()
        if _NUMERIC_RE.match(stripped):
            return stripped.replace(",", "")
        return stripped
    if isinstance(value, dict):
        return {str(k): _normalize(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_normalize(v) for v in value]
    return value


def parse_multilocation(raw: str) -> dict[str, Any]:
    """Parse and normalize a multi-location JSON string.

    Raises:
        TransferError(InvalidInput): If the string is not a JSON object
            with ``parents`` and ``interior``.
    """
    try:
        value = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as exc:
        raise TransferError(
            f"MultiLocation {raw!r} is not valid JSON: {exc}",
            ErrorKind.INVALID_INPUT,
        ) from exc

    if not isinstance(value, dict) or "parents" not in value or "interior" not in value:
        raise TransferError(
            f"MultiLocation {raw!r} must be an object with 'parents' and 'interior'",
            ErrorKind.INVALID_INPUT,
        )
    normalized: dict[str, Any] = _normalize(value)
    return normalized


def normalize_multilocation(location: str | dict[str, Any]) -> str:
    """Canonical string for a multi-location given as JSON text or a dict."""
    if isinstance(location, str):
        return canonical_json(parse_multilocation(location))
    return canonical_json(_normalize(location))


def same_location(a: str | dict[str, Any], b: str | dict[str, Any]) -> bool:
    return normalize_multilocation(a) == normalize_multilocation(b)
