"""
Chain client protocol — the network boundary.

Defines the interface the resolver and classifier depend on, not a
concrete implementation. This keeps the planning layer testable and
prevents HTTP calls from creeping into business logic.

Concrete implementations:
    - SidecarClient (substrate-api-sidecar REST API)
    - FakeChainClient (tests)

Every method is a read-only query. Transport-level failures (connection
refused, timeout) are raised by the implementation and reach the caller
unchanged — the planning layer never retries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from asset_transfer.registry import ChainTopologyInfo


@dataclass(frozen=True)
class AssetRecord:
    """On-chain record of an assets-pallet entry.

    Attributes:
        asset_id: Assets-pallet id as a decimal string.
        symbol: Metadata symbol, when the chain reports one.
        decimals: Metadata decimals, when the chain reports them.
    """

    asset_id: str
    symbol: str | None = None
    decimals: int | None = None


@runtime_checkable
class ChainClient(Protocol):
    """Interface for live chain queries used as registry fallback."""

    async def query_asset_exists(self, asset_id: int) -> AssetRecord | None:
        """Look up an assets-pallet id. None means the chain has no such asset."""
        ...

    async def query_asset_id_by_symbol(self, symbol: str) -> str | None:
        """Find the assets-pallet id whose metadata symbol matches, if any.

        This is the direct chain lookup the resolver escalates to when a
        symbol is neither a native token nor in the registry's assets
        table. Returning None ends resolution with AssetNotFound.
        Backends without a symbol index (SidecarClient) always return
        None, so unknown symbols only resolve through the registry there.
        """
        ...

    async def query_foreign_asset_exists(self, multi_location: str) -> bool:
        """Whether the foreign-assets pallet holds this multi-location."""
        ...

    async def query_liquid_pool_validity(
        self, system_chain_info: ChainTopologyInfo, asset_id: str
    ) -> None:
        """Validate a liquidity-pool token.

        Raises:
            TransferError(LiquidTokenInvalid): The token is not a pool asset.
        """
        ...

    async def query_account_nonce(self, address: str) -> int:
        """Current nonce of an account."""
        ...
