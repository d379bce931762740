"""
XCM type builder contract and shared behaviour.

One builder per direction. All builders share:

    - beneficiary: ``parents 0``, ``X1 AccountId32``
    - weight limit: ``Limited`` only with both components, else ``Unlimited``
    - asset list assembly: one fungible per amount, sorted by location

Each direction supplies its own destination, the concrete location of
each asset it can send, and the fee-asset index.
"""

from __future__ import annotations

from typing import ClassVar, Protocol, Sequence, runtime_checkable

from asset_transfer.client import ChainClient
from asset_transfer.classifier import Direction
from asset_transfer.errors import ErrorKind, TransferError
from asset_transfer.resolver import AssetKind, ResolvedAsset
from asset_transfer.xcm.types import (
    FungibleAsset,
    VersionedAssets,
    VersionedLocation,
    WeightLimit,
    WeightLimitOptions,
    XcmVersion,
    account_id32,
)

XCM_PALLET_RELAY = "xcmPallet"
XCM_PALLET_PARACHAIN = "polkadotXcm"

TELEPORT_METHOD = "limitedTeleportAssets"
RESERVE_TRANSFER_METHOD = "limitedReserveTransferAssets"


@runtime_checkable
class XcmTypeBuilder(Protocol):
    """Contract every direction variant implements."""

    direction: ClassVar[Direction]
    xcm_pallet: ClassVar[str]
    transfer_method: ClassVar[str]

    def build_beneficiary(self, account_id: str, xcm_version: XcmVersion) -> VersionedLocation: ...

    def build_destination(self, dest_id: int, xcm_version: XcmVersion) -> VersionedLocation: ...

    def build_assets(
        self,
        amounts: Sequence[str],
        xcm_version: XcmVersion,
        assets: Sequence[ResolvedAsset] = (),
    ) -> VersionedAssets: ...

    def build_weight_limit(self, opts: WeightLimitOptions, xcm_version: XcmVersion) -> WeightLimit: ...

    async def fee_asset_item(
        self,
        client: ChainClient,
        assets: VersionedAssets,
        fee_asset: ResolvedAsset | None = None,
    ) -> int: ...


def build_weight_limit(opts: WeightLimitOptions, xcm_version: XcmVersion) -> WeightLimit:
    """``Limited`` when requested with both components; otherwise ``Unlimited``.

    A missing component is not an error — it downgrades silently.
    """
    if opts.is_limited and opts.ref_time and opts.proof_size:
        return WeightLimit(xcm_version, ref_time=str(opts.ref_time), proof_size=str(opts.proof_size))
    return WeightLimit(xcm_version)


class BaseXcmTypeBuilder:
    """Shared behaviour; subclasses set the class attributes and locations."""

    direction: ClassVar[Direction]
    xcm_pallet: ClassVar[str] = XCM_PALLET_PARACHAIN
    transfer_method: ClassVar[str] = RESERVE_TRANSFER_METHOD

    # parents of a destination parachain as seen from the origin
    dest_parents: ClassVar[int] = 1

    def build_beneficiary(self, account_id: str, xcm_version: XcmVersion) -> VersionedLocation:
        if not account_id:
            raise TransferError("beneficiary account id must be non-empty", ErrorKind.INVALID_INPUT)
        return VersionedLocation(xcm_version, 0, (account_id32(account_id, xcm_version),))

    def build_destination(self, dest_id: int, xcm_version: XcmVersion) -> VersionedLocation:
        return VersionedLocation(xcm_version, self.dest_parents, ({"Parachain": str(dest_id)},))

    def build_assets(
        self,
        amounts: Sequence[str],
        xcm_version: XcmVersion,
        assets: Sequence[ResolvedAsset] = (),
    ) -> VersionedAssets:
        """One fungible per amount; no assets means the origin's native token.

        Raises:
            TransferError(InvalidInput): Amount/asset count mismatch, an
                asset this direction cannot carry, or a duplicate location.
        """
        expected = max(len(assets), 1)
        if len(amounts) != expected:
            raise TransferError(
                f"{self.direction.value} transfers need one amount per asset: "
                f"got {len(amounts)} amount(s) for {expected} asset(s)",
                ErrorKind.INVALID_INPUT,
            )

        if assets:
            locations = [self.asset_location(asset, xcm_version) for asset in assets]
        else:
            locations = [self.native_location(xcm_version)]

        fungibles = sorted(
            (FungibleAsset(location, str(amount).strip()) for location, amount in zip(locations, amounts)),
            key=lambda fungible: fungible.location.sort_key(),
        )
        for previous, current in zip(fungibles, fungibles[1:]):
            if previous.location == current.location:
                raise TransferError(
                    f"duplicate asset location {current.location.location_dict()}",
                    ErrorKind.INVALID_INPUT,
                )
        return VersionedAssets(xcm_version, tuple(fungibles))

    def build_weight_limit(self, opts: WeightLimitOptions, xcm_version: XcmVersion) -> WeightLimit:
        return build_weight_limit(opts, xcm_version)

    async def fee_asset_item(
        self,
        client: ChainClient,
        assets: VersionedAssets,
        fee_asset: ResolvedAsset | None = None,
    ) -> int:
        return 0

    # -----------------------------------------------------------------
    # Direction-specific locations
    # -----------------------------------------------------------------

    def native_location(self, xcm_version: XcmVersion) -> VersionedLocation:
        """Location of the origin's native token as seen from the origin."""
        return VersionedLocation(xcm_version, 0)

    def asset_location(self, asset: ResolvedAsset, xcm_version: XcmVersion) -> VersionedLocation:
        if asset.kind == AssetKind.NATIVE:
            return self.native_location(xcm_version)
        raise self.unsupported_asset(asset)

    def unsupported_asset(self, asset: ResolvedAsset) -> TransferError:
        return TransferError(
            f"{self.direction.value} transfers cannot carry {asset.kind.value} asset {asset.identifier}",
            ErrorKind.INVALID_INPUT,
        )


class FeeAssetByIndexMixin(BaseXcmTypeBuilder):
    """Fee paid by the caller-selected asset (``paysWithFeeDest``), default first."""

    async def fee_asset_item(
        self,
        client: ChainClient,
        assets: VersionedAssets,
        fee_asset: ResolvedAsset | None = None,
    ) -> int:
        if fee_asset is None:
            return 0
        location = self.asset_location(fee_asset, assets.version)
        index = assets.index_of(location)
        if index is None:
            raise TransferError(
                f"fee asset {fee_asset.identifier} is not among the transferred assets",
                ErrorKind.INVALID_INPUT,
            )
        return index
