"""
Transfer error taxonomy.

Every failure in the planning pipeline is a single ``TransferError``
carrying a machine-readable ``kind`` plus a human-readable message.
The set of kinds is closed:

    - InvalidInput: request shape is wrong (lengths, versions, ids).
    - AssetNotFound: no registry entry and the chain denies the asset.
    - UnknownChain: spec name not present in any relay snapshot.
    - UnsupportedRoute: no XCM direction for the (origin, dest) roles.
    - LiquidTokenInvalid: liquidity-pool token failed validation.

Errors are raised once at the failure site and never retried here.
Transport failures from a ChainClient are NOT wrapped — they reach the
caller as raised by the client.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Closed set of transfer failure categories."""

    INVALID_INPUT = "InvalidInput"
    ASSET_NOT_FOUND = "AssetNotFound"
    UNKNOWN_CHAIN = "UnknownChain"
    UNSUPPORTED_ROUTE = "UnsupportedRoute"
    LIQUID_TOKEN_INVALID = "LiquidTokenInvalid"


class TransferError(Exception):
    """Terminal failure for the current transfer request.

    Args:
        message: Human-readable description of what went wrong.
        kind: Machine-readable category from ErrorKind.
    """

    def __init__(self, message: str, kind: ErrorKind) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind

    def __repr__(self) -> str:
        return f"TransferError(kind={self.kind.value!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind.value, "message": self.message}
