"""
Cross-chain payload assembly.

Composes the resolver (impure, one chain query at a time) with the pure
builder for a direction:

    request → resolve assets → beneficiary / destination / assets /
    weight limit → fee asset index → XcmPayloadFragments

No partial payload is ever returned: any failure raises TransferError
before the fragments are assembled.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from asset_transfer.classifier import Direction, classify_direction
from asset_transfer.client import ChainClient
from asset_transfer.errors import ErrorKind, TransferError
from asset_transfer.identifiers import IntegerAssetId, SymbolAssetId, parse_asset_identifier
from asset_transfer.logger import get_logger
from asset_transfer.registry import ChainRole, ChainTopologyInfo, Registry
from asset_transfer.resolver import AssetKind, ResolvedAsset, resolve_identifier
from asset_transfer.xcm import WeightLimitOptions, XcmPayloadFragments, XcmVersion, get_builder

log = get_logger(__name__)


@dataclass(frozen=True)
class CrossChainRequest:
    """A cross-chain transfer request.

    Attributes:
        spec_name: Spec name of the origin chain.
        dest_chain_id: Relay-scoped id of the destination chain.
        dest_address: Beneficiary account (SS58 or hex AccountId32).
        amounts: One amount per asset, smallest unit, decimal strings.
        asset_ids: Symbols, integer ids or multi-locations. Empty means
            the origin's native token.
        weight_limit: Requested weight limit.
        pays_with_fee_dest: Asset id (from ``asset_ids``) paying fees.
        is_foreign_assets_transfer: ``asset_ids`` are multi-locations.
        is_liquid_token_transfer: ``asset_ids`` are pool LP tokens.
    """

    spec_name: str
    dest_chain_id: int
    dest_address: str
    amounts: tuple[str, ...]
    asset_ids: tuple[str, ...] = ()
    weight_limit: WeightLimitOptions = field(default_factory=WeightLimitOptions)
    pays_with_fee_dest: str | None = None
    is_foreign_assets_transfer: bool = False
    is_liquid_token_transfer: bool = False


async def resolve_xcm_asset(
    client: ChainClient,
    raw_asset_id: str,
    origin: ChainTopologyInfo,
    registry: Registry,
    *,
    is_foreign_assets_transfer: bool = False,
    is_liquid_token_transfer: bool = False,
) -> ResolvedAsset:
    """Resolve one asset id as seen from the origin chain.

    Parachain origins additionally recognise the relay token by symbol.
    """
    if is_liquid_token_transfer:
        lp_token = raw_asset_id.strip()
        await client.query_liquid_pool_validity(origin, lp_token)
        if not lp_token.isdigit():
            raise TransferError(
                f"Liquid tokens must be valid integers, got: {lp_token!r}",
                ErrorKind.LIQUID_TOKEN_INVALID,
            )
        return ResolvedAsset(AssetKind.POOL_ASSET, IntegerAssetId(int(lp_token)), source="pool")

    ident = parse_asset_identifier(raw_asset_id, is_foreign=is_foreign_assets_transfer)
    if (
        origin.role == ChainRole.PARACHAIN
        and isinstance(ident, SymbolAssetId)
        and not origin.is_native_token(ident.symbol)
        and any(token.lower() == ident.symbol.lower() for token in registry.relay_tokens)
    ):
        return ResolvedAsset(AssetKind.RELAY_NATIVE, ident)
    return await resolve_identifier(client, ident, origin)


def _check_direction(direction: Direction, registry: Registry, origin_id: int, dest_id: int) -> None:
    if origin_id == dest_id:
        raise TransferError(
            f"origin and destination are the same chain ({origin_id}); use a local transfer",
            ErrorKind.INVALID_INPUT,
        )
    actual = classify_direction(registry.chain_role(origin_id), registry.chain_role(dest_id))
    if actual != direction:
        raise TransferError(
            f"direction {direction.value} does not match chains {origin_id} -> {dest_id} ({actual.value})",
            ErrorKind.INVALID_INPUT,
        )


async def build_cross_chain_payload(
    direction: Direction,
    request: CrossChainRequest,
    xcm_version: int | XcmVersion,
    *,
    client: ChainClient,
    registry: Registry,
) -> XcmPayloadFragments:
    """Build the version-correct XCM fragments for a cross-chain transfer.

    Args:
        direction: Direction from ``classify_direction``.
        request: The transfer request.
        xcm_version: Target XCM version (2, 3 or 4).
        client: Live chain fallback for asset resolution.
        registry: Topology snapshot of the relay network.

    Raises:
        TransferError: InvalidInput, AssetNotFound, UnknownChain,
            UnsupportedRoute or LiquidTokenInvalid.
    """
    version = XcmVersion.parse(xcm_version)
    builder = get_builder(direction)

    origin_id = registry.chain_id_by_spec_name(request.spec_name)
    origin = registry.lookup(origin_id)
    assert origin is not None
    _check_direction(direction, registry, origin_id, request.dest_chain_id)

    if not request.amounts:
        raise TransferError("`amounts` must contain at least one amount", ErrorKind.INVALID_INPUT)
    if len(request.amounts) != max(len(request.asset_ids), 1):
        raise TransferError(
            "`amounts` must hold one entry per `assetIds` entry (or exactly one for the native token)",
            ErrorKind.INVALID_INPUT,
        )

    resolved: list[ResolvedAsset] = []
    for raw in request.asset_ids:
        resolved.append(
            await resolve_xcm_asset(
                client,
                raw,
                origin,
                registry,
                is_foreign_assets_transfer=request.is_foreign_assets_transfer,
                is_liquid_token_transfer=request.is_liquid_token_transfer,
            )
        )

    fee_asset = None
    if request.pays_with_fee_dest:
        fee_asset = await resolve_xcm_asset(
            client,
            request.pays_with_fee_dest,
            origin,
            registry,
            is_foreign_assets_transfer=request.is_foreign_assets_transfer,
            is_liquid_token_transfer=request.is_liquid_token_transfer,
        )

    beneficiary = builder.build_beneficiary(request.dest_address, version)
    destination = builder.build_destination(request.dest_chain_id, version)
    assets = builder.build_assets(request.amounts, version, resolved)
    weight_limit = builder.build_weight_limit(request.weight_limit, version)
    fee_asset_item = await builder.fee_asset_item(client, assets, fee_asset)

    log.info(
        "[PAYLOAD][BUILT] direction=%s version=%s origin=%s dest=%s assets=%d fee_item=%d limited=%s",
        direction.value,
        version.tag,
        origin.spec_name,
        request.dest_chain_id,
        len(assets),
        fee_asset_item,
        weight_limit.is_limited,
    )
    return XcmPayloadFragments(
        beneficiary=beneficiary,
        destination=destination,
        assets=assets,
        weight_limit=weight_limit,
        fee_asset_item=fee_asset_item,
    )


def amounts_tuple(amounts: Sequence[str | int]) -> tuple[str, ...]:
    return tuple(str(amount).strip() for amount in amounts)
