"""
Sidecar chain client — substrate-api-sidecar implementation of ChainClient.

Translates sidecar REST responses into AssetRecord / bool / int values.
Uses an injectable transport (HttpTransport) so the HTTP layer can be
swapped for test fakes without changing parsing logic.

No retry loops. No secrets. No XCM logic beyond response parsing.

Endpoints:
    - GET /pallets/assets/{id}/asset-info
    - GET /pallets/foreign-assets
    - GET /pallets/pool-assets/{id}/asset-info
    - GET /accounts/{address}/balance-info

Absent resources come back as 404 or with a null info object; both
are treated as "does not exist". Sidecar exposes no symbol index for
the assets pallet, so symbol lookups report "absent".
"""

from __future__ import annotations

from typing import Any

from asset_transfer.client import AssetRecord
from asset_transfer.config import settings
from asset_transfer.errors import ErrorKind, TransferError
from asset_transfer.logger import get_logger
from asset_transfer.multilocation import normalize_multilocation
from asset_transfer.registry import ChainTopologyInfo
from asset_transfer.transport import HttpTransport, HttpxTransport

log = get_logger(__name__)


class SidecarClient:
    """Sidecar REST client implementing the ChainClient protocol.

    Args:
        base_url: Sidecar root URL (e.g. "http://127.0.0.1:8080").
            Defaults to ``ASSET_TRANSFER_SIDECAR_URL``.
        transport: Injectable transport for HTTP GET. Defaults to
            HttpxTransport. Pass a FakeTransport for testing.
    """

    def __init__(
        self,
        base_url: str | None = None,
        transport: HttpTransport | None = None,
    ) -> None:
        self._base_url = (base_url or settings.SIDECAR_URL).rstrip("/")
        self._transport = transport or HttpxTransport()

    @property
    def base_url(self) -> str:
        return self._base_url

    # -----------------------------------------------------------------
    # ChainClient protocol methods
    # -----------------------------------------------------------------

    async def query_asset_exists(self, asset_id: int) -> AssetRecord | None:
        response = await self._transport.get_json(f"{self._base_url}/pallets/assets/{asset_id}/asset-info")
        return _parse_asset_info(str(asset_id), response)

    async def query_asset_id_by_symbol(self, symbol: str) -> str | None:
        log.debug("[SIDECAR][ASSETS] no symbol index available symbol=%s", symbol)
        return None

    async def query_foreign_asset_exists(self, multi_location: str) -> bool:
        response = await self._transport.get_json(f"{self._base_url}/pallets/foreign-assets")
        return _foreign_assets_contain(response, normalize_multilocation(multi_location))

    async def query_liquid_pool_validity(self, system_chain_info: ChainTopologyInfo, asset_id: str) -> None:
        """Check a liquid token against the registry's pools, then the chain.

        Raises:
            TransferError(LiquidTokenInvalid): Non-integer id, or neither
                the registry nor the pool-assets pallet knows the token.
        """
        if not asset_id.isdigit():
            raise TransferError(
                f"Liquid tokens must be valid integers, got: {asset_id!r}",
                ErrorKind.LIQUID_TOKEN_INVALID,
            )
        if system_chain_info.has_pool_asset(asset_id):
            return

        response = await self._transport.get_json(f"{self._base_url}/pallets/pool-assets/{asset_id}/asset-info")
        if not _has_info(response, "poolAssetInfo"):
            raise TransferError(
                f"No liquid token asset was detected. LiquidToken: {asset_id}",
                ErrorKind.LIQUID_TOKEN_INVALID,
            )

    async def query_account_nonce(self, address: str) -> int:
        response = await self._transport.get_json(f"{self._base_url}/accounts/{address}/balance-info")
        if not isinstance(response, dict) or "nonce" not in response:
            raise ValueError(f"sidecar balance-info response has no nonce for {address}")
        return int(str(response["nonce"]))


# =====================================================================
# Response parsing (pure functions, no I/O)
# =====================================================================


def _has_info(response: Any, key: str) -> bool:
    return isinstance(response, dict) and bool(response.get(key))


def _decode_symbol(raw: Any) -> str | None:
    """Sidecar reports metadata bytes as 0x-hex; plain strings pass through."""
    if not isinstance(raw, str) or not raw:
        return None
    if raw.startswith("0x"):
        try:
            return bytes.fromhex(raw[2:]).decode("utf-8", errors="replace") or None
        except ValueError:
            return raw
    return raw


def _parse_asset_info(asset_id: str, response: Any) -> AssetRecord | None:
    if not _has_info(response, "assetInfo"):
        return None
    metadata = response.get("assetMetaData") or {}
    decimals = metadata.get("decimals")
    return AssetRecord(
        asset_id=asset_id,
        symbol=_decode_symbol(metadata.get("symbol")),
        decimals=int(decimals) if decimals not in (None, "") else None,
    )


def _foreign_assets_contain(response: Any, wanted: str) -> bool:
    if not isinstance(response, dict):
        return False
    for item in response.get("items") or []:
        location = item.get("multiLocation") if isinstance(item, dict) else None
        if isinstance(location, (dict, str)) and normalize_multilocation(location) == wanted:
            return True
    return False
