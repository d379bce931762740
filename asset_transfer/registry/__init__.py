"""Static chain topology registry backed by a bundled JSON snapshot."""

from asset_transfer.registry.registry import (
    RELAY_CHAIN_ID,
    ChainRole,
    ChainTopologyInfo,
    ForeignAssetInfo,
    PoolPairInfo,
    Registry,
    load_snapshot,
    parse_chain_id,
    role_for_chain_id,
    validate_snapshot,
)

__all__ = [
    "RELAY_CHAIN_ID",
    "ChainRole",
    "ChainTopologyInfo",
    "ForeignAssetInfo",
    "PoolPairInfo",
    "Registry",
    "load_snapshot",
    "parse_chain_id",
    "role_for_chain_id",
    "validate_snapshot",
]
