"""
Asset resolver — turns a raw asset id into a canonical, verified asset.

Resolution is an ordered list of strategies per identifier kind. Each
strategy returns a ResolvedAsset or None; the first hit wins and the
request fails with AssetNotFound only after every strategy missed.

    MultiLocation: registry foreign table → chain foreign-assets query
    Integer:       registry assets table  → chain assets query
    Symbol:        native token → registry symbol scan → chain symbol lookup

Registry lookups are case-insensitive. The resolver never writes.

An id obtained from the chain by symbol is trusted as-is and is not
re-queried for existence.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Awaitable, Callable, Optional, Sequence

from asset_transfer.client import ChainClient
from asset_transfer.errors import ErrorKind, TransferError
from asset_transfer.identifiers import (
    AssetIdentifier,
    IntegerAssetId,
    MultiLocationAssetId,
    SymbolAssetId,
    parse_asset_identifier,
)
from asset_transfer.logger import get_logger
from asset_transfer.registry import ChainTopologyInfo, Registry

log = get_logger(__name__)


class AssetKind(StrEnum):
    """Where a resolved asset lives on the origin chain."""

    NATIVE = "Native"
    RELAY_NATIVE = "RelayNative"
    ASSET = "Asset"
    FOREIGN_ASSET = "ForeignAsset"
    POOL_ASSET = "PoolAsset"


@dataclass(frozen=True)
class ResolvedAsset:
    """A verified asset.

    Attributes:
        kind: Pallet category the asset belongs to.
        identifier: SymbolAssetId for native tokens, IntegerAssetId for
            assets/pool assets, MultiLocationAssetId for foreign assets.
        source: Which strategy produced it ("registry", "chain", ...).
    """

    kind: AssetKind
    identifier: AssetIdentifier
    source: str = "registry"


Strategy = Callable[
    [ChainClient, AssetIdentifier, ChainTopologyInfo], Awaitable[Optional[ResolvedAsset]]
]


# =========================================================================
# Strategies
# =========================================================================


async def _native_token(
    client: ChainClient, ident: AssetIdentifier, chain: ChainTopologyInfo
) -> Optional[ResolvedAsset]:
    assert isinstance(ident, SymbolAssetId)
    if chain.is_native_token(ident.symbol):
        return ResolvedAsset(AssetKind.NATIVE, ident)
    return None


async def _registry_asset_by_symbol(
    client: ChainClient, ident: AssetIdentifier, chain: ChainTopologyInfo
) -> Optional[ResolvedAsset]:
    assert isinstance(ident, SymbolAssetId)
    asset_id = chain.asset_id_by_symbol(ident.symbol)
    if asset_id is None:
        return None
    return ResolvedAsset(AssetKind.ASSET, IntegerAssetId(int(asset_id)))


async def _chain_asset_by_symbol(
    client: ChainClient, ident: AssetIdentifier, chain: ChainTopologyInfo
) -> Optional[ResolvedAsset]:
    assert isinstance(ident, SymbolAssetId)
    asset_id = await client.query_asset_id_by_symbol(ident.symbol)
    if asset_id is None:
        return None
    return ResolvedAsset(AssetKind.ASSET, IntegerAssetId(int(asset_id)), source="chain")


async def _registry_asset_by_id(
    client: ChainClient, ident: AssetIdentifier, chain: ChainTopologyInfo
) -> Optional[ResolvedAsset]:
    assert isinstance(ident, IntegerAssetId)
    if chain.asset_symbol(str(ident.value)) is None:
        return None
    return ResolvedAsset(AssetKind.ASSET, ident)


async def _chain_asset_by_id(
    client: ChainClient, ident: AssetIdentifier, chain: ChainTopologyInfo
) -> Optional[ResolvedAsset]:
    assert isinstance(ident, IntegerAssetId)
    record = await client.query_asset_exists(ident.value)
    if record is None:
        return None
    return ResolvedAsset(AssetKind.ASSET, ident, source="chain")


async def _registry_foreign_asset(
    client: ChainClient, ident: AssetIdentifier, chain: ChainTopologyInfo
) -> Optional[ResolvedAsset]:
    assert isinstance(ident, MultiLocationAssetId)
    if not chain.has_foreign_asset(ident.raw):
        return None
    return ResolvedAsset(AssetKind.FOREIGN_ASSET, ident)


async def _chain_foreign_asset(
    client: ChainClient, ident: AssetIdentifier, chain: ChainTopologyInfo
) -> Optional[ResolvedAsset]:
    assert isinstance(ident, MultiLocationAssetId)
    if not await client.query_foreign_asset_exists(ident.raw):
        return None
    return ResolvedAsset(AssetKind.FOREIGN_ASSET, ident, source="chain")


SYMBOL_STRATEGIES: Sequence[Strategy] = (_native_token, _registry_asset_by_symbol, _chain_asset_by_symbol)
INTEGER_STRATEGIES: Sequence[Strategy] = (_registry_asset_by_id, _chain_asset_by_id)
FOREIGN_STRATEGIES: Sequence[Strategy] = (_registry_foreign_asset, _chain_foreign_asset)


def _strategies_for(ident: AssetIdentifier) -> Sequence[Strategy]:
    if isinstance(ident, MultiLocationAssetId):
        return FOREIGN_STRATEGIES
    if isinstance(ident, IntegerAssetId):
        return INTEGER_STRATEGIES
    return SYMBOL_STRATEGIES


def _not_found_message(ident: AssetIdentifier, chain: ChainTopologyInfo) -> str:
    if isinstance(ident, MultiLocationAssetId):
        return f"MultiLocation {ident.raw} not found"
    if isinstance(ident, IntegerAssetId):
        return f"The integer assetId {ident.value} was not found."
    return f"assetId {ident.symbol} is not a valid symbol or integer asset id for {chain.spec_name}"


# =========================================================================
# resolve()
# =========================================================================


async def resolve_identifier(
    client: ChainClient,
    ident: AssetIdentifier,
    chain: ChainTopologyInfo,
) -> ResolvedAsset:
    """Run the strategies for an already-parsed identifier.

    Raises:
        TransferError(AssetNotFound): Every strategy missed.
    """
    for strategy in _strategies_for(ident):
        resolved = await strategy(client, ident, chain)
        if resolved is not None:
            log.debug(
                "[RESOLVER][HIT] chain=%s asset=%s strategy=%s kind=%s",
                chain.spec_name,
                ident,
                strategy.__name__.lstrip("_"),
                resolved.kind.value,
            )
            return resolved

    log.debug("[RESOLVER][MISS] chain=%s asset=%s", chain.spec_name, ident)
    raise TransferError(_not_found_message(ident, chain), ErrorKind.ASSET_NOT_FOUND)


async def resolve(
    client: ChainClient,
    raw_asset_id: str,
    chain_id: int,
    is_foreign_assets_transfer: bool,
    registry: Registry,
) -> ResolvedAsset:
    """Resolve a raw asset id on ``chain_id`` to a verified asset.

    Args:
        client: Live chain fallback for registry misses.
        raw_asset_id: Symbol, integer id, or multi-location JSON string.
        chain_id: Relay-scoped id of the chain the asset lives on.
        is_foreign_assets_transfer: Treat the id as a multi-location.
        registry: Topology snapshot for the relay.

    Raises:
        TransferError(UnknownChain): chain_id not in the registry.
        TransferError(InvalidInput): Malformed identifier.
        TransferError(AssetNotFound): No strategy found the asset.
    """
    chain = registry.lookup(chain_id)
    if chain is None:
        raise TransferError(
            f"chain id {chain_id} is not part of the {registry.relay_name} registry",
            ErrorKind.UNKNOWN_CHAIN,
        )
    ident = parse_asset_identifier(raw_asset_id, is_foreign=is_foreign_assets_transfer)
    return await resolve_identifier(client, ident, chain)
