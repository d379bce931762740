"""
XCM type builders, one per direction.

Public API:

    - ``get_builder(direction)`` — the builder variant for a direction.
    - ``BUILDERS`` — direction → builder instance (closed set).
    - Value types: ``XcmVersion``, ``VersionedLocation``, ``VersionedAssets``,
      ``FungibleAsset``, ``WeightLimit``, ``WeightLimitOptions``,
      ``XcmPayloadFragments``.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from asset_transfer.classifier import Direction
from asset_transfer.xcm.base import (
    RESERVE_TRANSFER_METHOD,
    TELEPORT_METHOD,
    XCM_PALLET_PARACHAIN,
    XCM_PALLET_RELAY,
    BaseXcmTypeBuilder,
    XcmTypeBuilder,
    build_weight_limit,
)
from asset_transfer.xcm.para import ParaToPara, ParaToRelay, ParaToSystem
from asset_transfer.xcm.relay import RelayToPara, RelayToSystem
from asset_transfer.xcm.system import SystemToPara, SystemToRelay, SystemToSystem
from asset_transfer.xcm.types import (
    FungibleAsset,
    VersionedAssets,
    VersionedLocation,
    WeightLimit,
    WeightLimitOptions,
    XcmPayloadFragments,
    XcmVersion,
    location_from_json,
)

BUILDERS: Mapping[Direction, BaseXcmTypeBuilder] = MappingProxyType(
    {
        builder.direction: builder
        for builder in (
            RelayToSystem(),
            RelayToPara(),
            SystemToRelay(),
            SystemToSystem(),
            SystemToPara(),
            ParaToRelay(),
            ParaToSystem(),
            ParaToPara(),
        )
    }
)


def get_builder(direction: Direction) -> BaseXcmTypeBuilder:
    return BUILDERS[direction]


__all__ = [
    "BUILDERS",
    "RESERVE_TRANSFER_METHOD",
    "TELEPORT_METHOD",
    "XCM_PALLET_PARACHAIN",
    "XCM_PALLET_RELAY",
    "BaseXcmTypeBuilder",
    "FungibleAsset",
    "ParaToPara",
    "ParaToRelay",
    "ParaToSystem",
    "RelayToPara",
    "RelayToSystem",
    "SystemToPara",
    "SystemToRelay",
    "SystemToSystem",
    "VersionedAssets",
    "VersionedLocation",
    "WeightLimit",
    "WeightLimitOptions",
    "XcmPayloadFragments",
    "XcmTypeBuilder",
    "XcmVersion",
    "build_weight_limit",
    "get_builder",
    "location_from_json",
]
