"""
AssetTransferApi — one entry point from transfer request to call plan.

    same chain  → LocalCallPlan (balances / assets / foreignAssets / poolAssets)
    other chain → XcmCallPlan   (xcmPallet / polkadotXcm limited* call)

Plans describe the extrinsic to construct; signing and submission belong
to the caller's chain client.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from asset_transfer.classifier import (
    Direction,
    LocalClassification,
    TransferKind,
    classify_direction,
    classify_local,
)
from asset_transfer.client import ChainClient
from asset_transfer.config import settings
from asset_transfer.errors import ErrorKind, TransferError
from asset_transfer.identifiers import MultiLocationAssetId
from asset_transfer.logger import get_logger
from asset_transfer.payload import CrossChainRequest, amounts_tuple, build_cross_chain_payload
from asset_transfer.registry import Registry, parse_chain_id
from asset_transfer.xcm import WeightLimitOptions, XcmPayloadFragments, get_builder

log = get_logger(__name__)

_LOCAL_PALLETS = {
    TransferKind.LOCAL_BALANCES: "balances",
    TransferKind.LOCAL_ASSETS: "assets",
    TransferKind.LOCAL_FOREIGN_ASSETS: "foreignAssets",
    TransferKind.LOCAL_POOL_ASSETS: "poolAssets",
}


@dataclass(frozen=True)
class TransferRequest:
    """Caller-facing transfer request.

    Attributes:
        dest_chain_id: Destination chain id; the origin's own id means local.
        dest_address: Recipient account.
        asset_ids: Symbols, integer ids or multi-locations.
        amounts: Amounts in the asset's smallest unit.
        xcm_version: XCM version for cross-chain transfers. None uses
            ``ASSET_TRANSFER_DEFAULT_XCM_VERSION``.
        weight_limit: Weight limit for cross-chain transfers.
        pays_with_fee_dest: Asset paying destination fees.
        is_foreign_assets_transfer: ``asset_ids`` are multi-locations.
        is_liquid_token_transfer: ``asset_ids`` are pool LP tokens.
        keep_alive: Local transfers use ``transferKeepAlive``.
    """

    dest_chain_id: str | int
    dest_address: str
    asset_ids: Sequence[str]
    amounts: Sequence[str]
    xcm_version: int | None = None
    weight_limit: WeightLimitOptions = field(default_factory=WeightLimitOptions)
    pays_with_fee_dest: str | None = None
    is_foreign_assets_transfer: bool = False
    is_liquid_token_transfer: bool = False
    keep_alive: bool = False


@dataclass(frozen=True)
class LocalCallPlan:
    kind: TransferKind
    pallet: str
    method: str
    args: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "pallet": self.pallet, "method": self.method, "args": self.args}


@dataclass(frozen=True)
class XcmCallPlan:
    kind: TransferKind
    direction: Direction
    pallet: str
    method: str
    fragments: XcmPayloadFragments

    @property
    def args(self) -> dict[str, Any]:
        return self.fragments.to_call_args()

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "direction": self.direction.value,
            "pallet": self.pallet,
            "method": self.method,
            "xcmVersion": self.fragments.version.value,
            "args": self.args,
        }


class AssetTransferApi:
    """Plans transfers originating on one chain.

    Args:
        client: Chain client used as registry fallback.
        spec_name: Spec name of the origin chain.
        registry: Topology snapshot. Defaults to the bundled snapshot's
            relay for ``spec_name``.
    """

    def __init__(self, client: ChainClient, spec_name: str, registry: Registry | None = None) -> None:
        self._client = client
        self._spec_name = spec_name
        self._registry = registry or Registry.load(spec_name)
        self._origin_id = self._registry.chain_id_by_spec_name(spec_name)

    @property
    def registry(self) -> Registry:
        return self._registry

    @property
    def origin_chain_id(self) -> int:
        return self._origin_id

    async def create_transfer(self, request: TransferRequest) -> LocalCallPlan | XcmCallPlan:
        """Resolve a request into a local call or an XCM call plan.

        Raises:
            TransferError: Any kind of the closed taxonomy.
        """
        dest_id = parse_chain_id(request.dest_chain_id)
        if not request.dest_address:
            raise TransferError("`destAddr` must be non-empty", ErrorKind.INVALID_INPUT)

        if dest_id == self._origin_id:
            return await self._local_plan(request)
        return await self._xcm_plan(request, dest_id)

    async def _local_plan(self, request: TransferRequest) -> LocalCallPlan:
        classification = await classify_local(
            self._client,
            list(request.asset_ids),
            list(request.amounts),
            self._spec_name,
            self._registry,
            request.is_foreign_assets_transfer,
            request.is_liquid_token_transfer,
        )
        method = "transferKeepAlive" if request.keep_alive else "transfer"
        plan = LocalCallPlan(
            kind=classification.kind,
            pallet=_LOCAL_PALLETS[classification.kind],
            method=method,
            args=_local_args(classification, request.dest_address, str(request.amounts[0]).strip()),
        )
        log.info("[API][LOCAL] spec=%s call=%s.%s", self._spec_name, plan.pallet, plan.method)
        return plan

    async def _xcm_plan(self, request: TransferRequest, dest_id: int) -> XcmCallPlan:
        direction = classify_direction(
            self._registry.chain_role(self._origin_id),
            self._registry.chain_role(dest_id),
        )
        cross_chain = CrossChainRequest(
            spec_name=self._spec_name,
            dest_chain_id=dest_id,
            dest_address=request.dest_address,
            amounts=amounts_tuple(request.amounts),
            asset_ids=tuple(request.asset_ids),
            weight_limit=request.weight_limit,
            pays_with_fee_dest=request.pays_with_fee_dest,
            is_foreign_assets_transfer=request.is_foreign_assets_transfer,
            is_liquid_token_transfer=request.is_liquid_token_transfer,
        )
        xcm_version = request.xcm_version if request.xcm_version is not None else settings.DEFAULT_XCM_VERSION
        fragments = await build_cross_chain_payload(
            direction,
            cross_chain,
            xcm_version,
            client=self._client,
            registry=self._registry,
        )
        builder = get_builder(direction)
        plan = XcmCallPlan(
            kind=TransferKind.for_direction(direction),
            direction=direction,
            pallet=builder.xcm_pallet,
            method=builder.transfer_method,
            fragments=fragments,
        )
        log.info("[API][XCM] spec=%s dest=%s call=%s.%s", self._spec_name, dest_id, plan.pallet, plan.method)
        return plan


def _local_args(classification: LocalClassification, dest_address: str, amount: str) -> dict[str, Any]:
    if classification.kind == TransferKind.LOCAL_BALANCES:
        return {"dest": dest_address, "value": amount}

    asset = classification.asset
    assert asset is not None
    if isinstance(asset.identifier, MultiLocationAssetId):
        asset_id: Any = asset.identifier.location
    else:
        asset_id = str(asset.identifier)
    return {"id": asset_id, "target": dest_address, "amount": amount}
