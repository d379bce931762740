"""
Asset identifiers — the parsed form of caller-supplied asset ids.

Parsing happens once, at the boundary:

    - foreign-assets transfer → MultiLocationAssetId (must be JSON)
    - all decimal digits      → IntegerAssetId (u128)
    - anything else           → SymbolAssetId
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Union

from asset_transfer.errors import ErrorKind, TransferError
from asset_transfer.multilocation import normalize_multilocation, parse_multilocation

U128_MAX = 2**128 - 1

_INTEGER_RE = re.compile(r"^\d+$")


@dataclass(frozen=True)
class SymbolAssetId:
    symbol: str

    def __str__(self) -> str:
        return self.symbol


@dataclass(frozen=True)
class IntegerAssetId:
    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= U128_MAX:
            raise ValueError(f"asset id must fit in u128, got: {self.value}")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class MultiLocationAssetId:
    raw: str

    @property
    def location(self) -> dict[str, Any]:
        return parse_multilocation(self.raw)

    @property
    def key(self) -> str:
        """Canonical form used for equality against registry entries."""
        return normalize_multilocation(self.raw)

    def __str__(self) -> str:
        return self.raw


AssetIdentifier = Union[SymbolAssetId, IntegerAssetId, MultiLocationAssetId]


def parse_asset_identifier(raw: str, *, is_foreign: bool = False) -> AssetIdentifier:
    """Turn a raw caller string into an AssetIdentifier.

    Raises:
        TransferError(InvalidInput): Empty input, malformed multi-location,
            or an integer that does not fit in u128.
    """
    text = raw.strip() if isinstance(raw, str) else ""
    if not text:
        raise TransferError(f"asset id must be a non-empty string, got: {raw!r}", ErrorKind.INVALID_INPUT)

    if is_foreign:
        parse_multilocation(text)
        return MultiLocationAssetId(text)

    if _INTEGER_RE.match(text):
        value = int(text)
        if value > U128_MAX:
            raise TransferError(f"asset id {text} does not fit in u128", ErrorKind.INVALID_INPUT)
        return IntegerAssetId(value)

    return SymbolAssetId(text)
