"""
Transfer classifier — local pallet category or cross-chain direction.

Local transfers are validated before any resolution work:

    - ``asset_ids`` has 0 or 1 entries, ``amounts`` exactly 1.
    - foreign-assets transfers name exactly one multi-location.
    - liquid-token transfers name exactly one pool token.

Decision order (first match wins):

    1. foreign-assets transfer → LocalForeignAssets
    2. liquid-token transfer   → LocalPoolAssets (client validates)
    3. no asset id             → LocalBalances
    4. resolver: native token  → LocalBalances, asset → LocalAssets

Cross-chain requests are classified by a pure lookup on the
(origin role, destination role) pair.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Mapping, Sequence

from asset_transfer.client import ChainClient
from asset_transfer.errors import ErrorKind, TransferError
from asset_transfer.identifiers import IntegerAssetId
from asset_transfer.logger import get_logger
from asset_transfer.registry import ChainRole, Registry
from asset_transfer.resolver import AssetKind, ResolvedAsset, resolve

log = get_logger(__name__)


class Direction(StrEnum):
    """Supported cross-chain directions."""

    RELAY_TO_SYSTEM = "RelayToSystem"
    RELAY_TO_PARA = "RelayToPara"
    SYSTEM_TO_RELAY = "SystemToRelay"
    SYSTEM_TO_SYSTEM = "SystemToSystem"
    SYSTEM_TO_PARA = "SystemToPara"
    PARA_TO_RELAY = "ParaToRelay"
    PARA_TO_SYSTEM = "ParaToSystem"
    PARA_TO_PARA = "ParaToPara"


class TransferKind(StrEnum):
    """Outcome of classifying a request; exactly one per request."""

    LOCAL_BALANCES = "Balances"
    LOCAL_ASSETS = "Assets"
    LOCAL_FOREIGN_ASSETS = "ForeignAssets"
    LOCAL_POOL_ASSETS = "PoolAssets"
    XCM_RELAY_TO_SYSTEM = "XcmRelayToSystem"
    XCM_RELAY_TO_PARA = "XcmRelayToPara"
    XCM_SYSTEM_TO_RELAY = "XcmSystemToRelay"
    XCM_SYSTEM_TO_SYSTEM = "XcmSystemToSystem"
    XCM_SYSTEM_TO_PARA = "XcmSystemToPara"
    XCM_PARA_TO_RELAY = "XcmParaToRelay"
    XCM_PARA_TO_SYSTEM = "XcmParaToSystem"
    XCM_PARA_TO_PARA = "XcmParaToPara"

    @property
    def is_local(self) -> bool:
        return not self.value.startswith("Xcm")

    @classmethod
    def for_direction(cls, direction: Direction) -> "TransferKind":
        return cls(f"Xcm{direction.value}")


_DIRECTIONS: Mapping[tuple[ChainRole, ChainRole], Direction] = {
    (ChainRole.RELAY, ChainRole.SYSTEM_PARACHAIN): Direction.RELAY_TO_SYSTEM,
    (ChainRole.RELAY, ChainRole.PARACHAIN): Direction.RELAY_TO_PARA,
    (ChainRole.SYSTEM_PARACHAIN, ChainRole.RELAY): Direction.SYSTEM_TO_RELAY,
    (ChainRole.SYSTEM_PARACHAIN, ChainRole.SYSTEM_PARACHAIN): Direction.SYSTEM_TO_SYSTEM,
    (ChainRole.SYSTEM_PARACHAIN, ChainRole.PARACHAIN): Direction.SYSTEM_TO_PARA,
    (ChainRole.PARACHAIN, ChainRole.RELAY): Direction.PARA_TO_RELAY,
    (ChainRole.PARACHAIN, ChainRole.SYSTEM_PARACHAIN): Direction.PARA_TO_SYSTEM,
    (ChainRole.PARACHAIN, ChainRole.PARACHAIN): Direction.PARA_TO_PARA,
}


def classify_direction(source_role: ChainRole, dest_role: ChainRole) -> Direction:
    """Map an (origin, destination) role pair to its XCM direction.

    Raises:
        TransferError(UnsupportedRoute): No direction for the pair.
    """
    direction = _DIRECTIONS.get((source_role, dest_role))
    if direction is None:
        raise TransferError(
            f"No XCM route from a {source_role.value} chain to a {dest_role.value} chain",
            ErrorKind.UNSUPPORTED_ROUTE,
        )
    return direction


# =========================================================================
# Local transfers
# =========================================================================


@dataclass(frozen=True)
class LocalClassification:
    """Local transfer kind plus the asset it resolved to (None for native)."""

    kind: TransferKind
    asset: ResolvedAsset | None = None


def check_local_tx_input(
    asset_ids: Sequence[str],
    amounts: Sequence[str],
    is_foreign_assets_transfer: bool,
    is_liquid_token_transfer: bool,
) -> None:
    """Shape checks that run before any resolution work.

    Raises:
        TransferError(InvalidInput): On any length violation.
    """
    if len(asset_ids) > 1 or len(amounts) != 1:
        raise TransferError(
            "Local transactions must have the `assetIds` input be a length of 1 or 0, "
            "and the `amounts` input be a length of 1",
            ErrorKind.INVALID_INPUT,
        )
    if is_foreign_assets_transfer and len(asset_ids) == 0:
        raise TransferError(
            "Local foreignAsset transactions must have the `assetIds` input be a length of 1",
            ErrorKind.INVALID_INPUT,
        )
    if is_liquid_token_transfer and len(asset_ids) == 0:
        raise TransferError(
            "Local liquid token transactions must have the `assetIds` input be a length of 1",
            ErrorKind.INVALID_INPUT,
        )


async def classify_local(
    client: ChainClient,
    asset_ids: Sequence[str],
    amounts: Sequence[str],
    spec_name: str,
    registry: Registry,
    is_foreign_assets_transfer: bool = False,
    is_liquid_token_transfer: bool = False,
) -> LocalClassification:
    """Classify a same-chain transfer and keep the resolved asset."""
    check_local_tx_input(asset_ids, amounts, is_foreign_assets_transfer, is_liquid_token_transfer)

    chain_id = registry.chain_id_by_spec_name(spec_name)

    if is_foreign_assets_transfer:
        asset = await resolve(client, asset_ids[0], chain_id, True, registry)
        return LocalClassification(TransferKind.LOCAL_FOREIGN_ASSETS, asset)

    if is_liquid_token_transfer:
        system_chain_info = registry.lookup(chain_id)
        assert system_chain_info is not None
        lp_token = asset_ids[0].strip()
        await client.query_liquid_pool_validity(system_chain_info, lp_token)
        if not lp_token.isdigit():
            raise TransferError(
                f"Liquid tokens must be valid integers, got: {lp_token!r}",
                ErrorKind.LIQUID_TOKEN_INVALID,
            )
        asset = ResolvedAsset(AssetKind.POOL_ASSET, IntegerAssetId(int(lp_token)), source="pool")
        return LocalClassification(TransferKind.LOCAL_POOL_ASSETS, asset)

    if len(asset_ids) == 0:
        return LocalClassification(TransferKind.LOCAL_BALANCES)

    asset = await resolve(client, asset_ids[0], chain_id, False, registry)
    if asset.kind == AssetKind.NATIVE:
        return LocalClassification(TransferKind.LOCAL_BALANCES, asset)
    return LocalClassification(TransferKind.LOCAL_ASSETS, asset)


async def classify_local_transfer(
    client: ChainClient,
    asset_ids: Sequence[str],
    amounts: Sequence[str],
    spec_name: str,
    registry: Registry,
    is_foreign_assets_transfer: bool = False,
    is_liquid_token_transfer: bool = False,
) -> TransferKind:
    """Decide which local pallet a same-chain transfer goes through.

    Raises:
        TransferError(InvalidInput): Bad ``asset_ids``/``amounts`` shape.
        TransferError(UnknownChain): ``spec_name`` not in the registry.
        TransferError(AssetNotFound): Asset unknown to registry and chain.
        TransferError(LiquidTokenInvalid): Raised by the client's pool check.
    """
    result = await classify_local(
        client,
        asset_ids,
        amounts,
        spec_name,
        registry,
        is_foreign_assets_transfer,
        is_liquid_token_transfer,
    )
    log.debug("[CLASSIFIER][LOCAL] spec=%s assets=%s kind=%s", spec_name, list(asset_ids), result.kind.value)
    return result.kind
