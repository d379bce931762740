"""
Builders for messages leaving a (non-system) parachain.

Asset locations as seen from a parachain:

    own native token   parents 0, Here
    relay token        parents 1, Here
    foreign asset      its own multi-location
"""

from __future__ import annotations

from asset_transfer.classifier import Direction
from asset_transfer.identifiers import MultiLocationAssetId
from asset_transfer.resolver import AssetKind, ResolvedAsset
from asset_transfer.xcm.base import BaseXcmTypeBuilder, FeeAssetByIndexMixin
from asset_transfer.xcm.types import VersionedLocation, XcmVersion, location_from_json


class _FromPara(BaseXcmTypeBuilder):
    def asset_location(self, asset: ResolvedAsset, xcm_version: XcmVersion) -> VersionedLocation:
        if asset.kind == AssetKind.NATIVE:
            return self.native_location(xcm_version)
        if asset.kind == AssetKind.RELAY_NATIVE:
            return VersionedLocation(xcm_version, 1)
        if asset.kind == AssetKind.FOREIGN_ASSET and isinstance(asset.identifier, MultiLocationAssetId):
            return location_from_json(asset.identifier.location, xcm_version)
        raise self.unsupported_asset(asset)


class ParaToRelay(_FromPara):
    """Reserve withdrawal of the relay token back to the relay chain."""

    direction = Direction.PARA_TO_RELAY

    def build_destination(self, dest_id: int, xcm_version: XcmVersion) -> VersionedLocation:
        return VersionedLocation(xcm_version, 1)

    def native_location(self, xcm_version: XcmVersion) -> VersionedLocation:
        # Only the relay token can travel to the relay chain.
        return VersionedLocation(xcm_version, 1)

    def asset_location(self, asset: ResolvedAsset, xcm_version: XcmVersion) -> VersionedLocation:
        if asset.kind == AssetKind.RELAY_NATIVE:
            return VersionedLocation(xcm_version, 1)
        raise self.unsupported_asset(asset)


class ParaToSystem(FeeAssetByIndexMixin, _FromPara):
    direction = Direction.PARA_TO_SYSTEM


class ParaToPara(FeeAssetByIndexMixin, _FromPara):
    direction = Direction.PARA_TO_PARA
