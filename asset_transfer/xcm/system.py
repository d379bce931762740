"""
Builders for messages leaving a system parachain.

Asset locations as seen from a system parachain:

    native (relay token)  parents 1, Here
    assets pallet id      parents 0, X2[PalletInstance 50, GeneralIndex id]
    pool assets id        parents 0, X2[PalletInstance 55, GeneralIndex id]
    foreign asset         its own multi-location
"""

from __future__ import annotations

from asset_transfer.classifier import Direction
from asset_transfer.identifiers import MultiLocationAssetId
from asset_transfer.resolver import AssetKind, ResolvedAsset
from asset_transfer.xcm.base import (
    TELEPORT_METHOD,
    BaseXcmTypeBuilder,
    FeeAssetByIndexMixin,
)
from asset_transfer.xcm.types import VersionedLocation, XcmVersion, location_from_json

ASSETS_PALLET_INSTANCE = 50
POOL_ASSETS_PALLET_INSTANCE = 55


class _FromSystem(BaseXcmTypeBuilder):
    def native_location(self, xcm_version: XcmVersion) -> VersionedLocation:
        return VersionedLocation(xcm_version, 1)

    def asset_location(self, asset: ResolvedAsset, xcm_version: XcmVersion) -> VersionedLocation:
        if asset.kind == AssetKind.NATIVE:
            return self.native_location(xcm_version)
        if asset.kind in (AssetKind.ASSET, AssetKind.POOL_ASSET):
            pallet = ASSETS_PALLET_INSTANCE if asset.kind == AssetKind.ASSET else POOL_ASSETS_PALLET_INSTANCE
            return VersionedLocation(
                xcm_version,
                0,
                ({"PalletInstance": str(pallet)}, {"GeneralIndex": str(asset.identifier)}),
            )
        if asset.kind == AssetKind.FOREIGN_ASSET and isinstance(asset.identifier, MultiLocationAssetId):
            return location_from_json(asset.identifier.location, xcm_version)
        raise self.unsupported_asset(asset)


class SystemToRelay(_FromSystem):
    """Teleport of the relay token back up to the relay chain."""

    direction = Direction.SYSTEM_TO_RELAY
    transfer_method = TELEPORT_METHOD

    def build_destination(self, dest_id: int, xcm_version: XcmVersion) -> VersionedLocation:
        return VersionedLocation(xcm_version, 1)

    def asset_location(self, asset: ResolvedAsset, xcm_version: XcmVersion) -> VersionedLocation:
        if asset.kind == AssetKind.NATIVE:
            return self.native_location(xcm_version)
        raise self.unsupported_asset(asset)


class SystemToSystem(FeeAssetByIndexMixin, _FromSystem):
    """Teleport between two system parachains of the same relay."""

    direction = Direction.SYSTEM_TO_SYSTEM
    transfer_method = TELEPORT_METHOD


class SystemToPara(FeeAssetByIndexMixin, _FromSystem):
    """Reserve transfer from a system parachain to a parachain."""

    direction = Direction.SYSTEM_TO_PARA
