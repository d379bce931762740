"""Builders for messages leaving the relay chain."""

from __future__ import annotations

from asset_transfer.classifier import Direction
from asset_transfer.xcm.base import (
    TELEPORT_METHOD,
    XCM_PALLET_RELAY,
    BaseXcmTypeBuilder,
)


class RelayToSystem(BaseXcmTypeBuilder):
    """Teleport of the relay token down to a system parachain."""

    direction = Direction.RELAY_TO_SYSTEM
    xcm_pallet = XCM_PALLET_RELAY
    transfer_method = TELEPORT_METHOD
    dest_parents = 0


class RelayToPara(BaseXcmTypeBuilder):
    """Reserve transfer of the relay token to a parachain."""

    direction = Direction.RELAY_TO_PARA
    xcm_pallet = XCM_PALLET_RELAY
    dest_parents = 0
