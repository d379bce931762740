"""
asset-transfer: plan local and cross-chain (XCM) asset transfers.

Public API:

    Planning (I/O only through a ChainClient):
        - ``AssetTransferApi.create_transfer()`` — request → call plan.
        - ``classify_local_transfer()`` — same-chain pallet category.
        - ``classify_direction()`` — (origin role, dest role) → Direction.
        - ``build_cross_chain_payload()`` — versioned XCM fragments.
        - ``resolve()`` — raw asset id → verified asset.

    Registry (pure, bundled snapshot):
        - ``Registry``, ``ChainTopologyInfo``, ``ChainRole``.

    Protocols (for dependency injection):
        - ``ChainClient`` — live chain queries.
        - ``HttpTransport`` — HTTP seam for ``SidecarClient``.

    Errors:
        - ``TransferError`` with ``ErrorKind``.
"""

from asset_transfer.api import (
    AssetTransferApi,
    LocalCallPlan,
    TransferRequest,
    XcmCallPlan,
)
from asset_transfer.classifier import (
    Direction,
    TransferKind,
    classify_direction,
    classify_local_transfer,
)
from asset_transfer.client import AssetRecord, ChainClient
from asset_transfer.errors import ErrorKind, TransferError
from asset_transfer.identifiers import (
    AssetIdentifier,
    IntegerAssetId,
    MultiLocationAssetId,
    SymbolAssetId,
    parse_asset_identifier,
)
from asset_transfer.payload import CrossChainRequest, build_cross_chain_payload
from asset_transfer.registry import ChainRole, ChainTopologyInfo, Registry
from asset_transfer.resolver import AssetKind, ResolvedAsset, resolve
from asset_transfer.sidecar_client import SidecarClient
from asset_transfer.transport import HttpTransport, HttpxTransport
from asset_transfer.xcm import (
    WeightLimitOptions,
    XcmPayloadFragments,
    XcmVersion,
)

__version__ = "0.1.0"

__all__ = [
    "AssetIdentifier",
    "AssetKind",
    "AssetRecord",
    "AssetTransferApi",
    "ChainClient",
    "ChainRole",
    "ChainTopologyInfo",
    "CrossChainRequest",
    "Direction",
    "ErrorKind",
    "HttpTransport",
    "HttpxTransport",
    "IntegerAssetId",
    "LocalCallPlan",
    "MultiLocationAssetId",
    "Registry",
    "ResolvedAsset",
    "SidecarClient",
    "SymbolAssetId",
    "TransferError",
    "TransferKind",
    "TransferRequest",
    "WeightLimitOptions",
    "XcmCallPlan",
    "XcmPayloadFragments",
    "XcmVersion",
    "build_cross_chain_payload",
    "classify_direction",
    "classify_local_transfer",
    "parse_asset_identifier",
    "resolve",
]
