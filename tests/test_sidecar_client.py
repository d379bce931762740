"""
Tests for SidecarClient — canned sidecar REST responses, no network.

Uses a FakeTransport keyed by URL for the parsing logic and pytest-httpx
for the HttpxTransport status handling.

Test plan:
- Assets: asset-info parsed (hex symbol decoded, decimals), null
  assetInfo and 404 → None
- Foreign assets: multi-location matched across formatting, no match
  → False, unexpected body → False
- Pools: non-integer id and unknown pool → LiquidTokenInvalid,
  registry hit skips the request, pool-assets hit accepted
- Nonce: parsed from balance-info, missing → ValueError
- Transport: failures propagate; 404 → None, 5xx → HTTPStatusError
"""

from typing import Any, Mapping

import httpx
import pytest
from pytest_httpx import HTTPXMock

from asset_transfer.client import AssetRecord, ChainClient
from asset_transfer.errors import ErrorKind, TransferError
from asset_transfer.registry import Registry
from asset_transfer.sidecar_client import SidecarClient
from asset_transfer.transport import HttpTransport, HttpxTransport

# ---------------------------------------------------------------------------
# Fake transport
# ---------------------------------------------------------------------------

BASE_URL = "http://sidecar.local:8080"


class FakeTransport:
    """Returns canned responses keyed by URL; unknown URLs look like 404s."""

    def __init__(self, responses: Mapping[str, Any] | None = None) -> None:
        self._responses = dict(responses or {})
        self.calls: list[str] = []

    async def get_json(self, url: str, params: Mapping[str, Any] | None = None) -> Any:
        self.calls.append(url)
        return self._responses.get(url)


class ErrorTransport:
    def __init__(self, exc: Exception) -> None:
        self._exc = exc

    async def get_json(self, url: str, params: Mapping[str, Any] | None = None) -> Any:
        raise self._exc


# ---------------------------------------------------------------------------
# Canned responses
# ---------------------------------------------------------------------------

ASSET_INFO_USDT = {
    "at": {"hash": "0x" + "ab" * 32, "height": "6000000"},
    "assetInfo": {"owner": "5F...", "supply": "1000000", "isFrozen": False},
    "assetMetaData": {"name": "0x54657468657220555344", "symbol": "0x55534474", "decimals": "6"},
}

ASSET_INFO_EMPTY = {"at": {"hash": "0x" + "cd" * 32, "height": "6000000"}, "assetInfo": None}

FOREIGN_ASSETS = {
    "at": {"hash": "0x" + "ef" * 32, "height": "6000000"},
    "items": [
        {
            "multiLocation": {"parents": "1", "interior": {"X1": {"Parachain": "2,023"}}},
            "foreignAssetInfo": {"supply": "0"},
        },
        {
            "multiLocation": {"parents": 1, "interior": {"X2": [{"Parachain": 2125}, {"GeneralIndex": 0}]}},
            "foreignAssetInfo": {"supply": "10"},
        },
    ],
}

POOL_ASSET_INFO = {"poolAssetInfo": {"owner": "5F...", "supply": "42"}, "poolAssetMetaData": {}}

BALANCE_INFO = {"nonce": "17", "tokenSymbol": "KSM", "free": "100"}

TNKR = '{"parents":"1","interior":{"X2":[{"Parachain":"2125"},{"GeneralIndex":"0"}]}}'


def _asset_hub():
    info = Registry.load("asset-hub-kusama").lookup(1000)
    assert info is not None
    return info


# ---------------------------------------------------------------------------
# Protocol conformance
# ---------------------------------------------------------------------------


def test_implements_protocols() -> None:
    assert isinstance(SidecarClient(BASE_URL, FakeTransport()), ChainClient)
    assert isinstance(FakeTransport(), HttpTransport)
    assert isinstance(HttpxTransport(), HttpTransport)


def test_base_url_trailing_slash() -> None:
    assert SidecarClient(BASE_URL + "/", FakeTransport()).base_url == BASE_URL


# ---------------------------------------------------------------------------
# Assets
# ---------------------------------------------------------------------------


class TestAssetExists:
    @pytest.mark.asyncio
    async def test_parsed(self) -> None:
        transport = FakeTransport({f"{BASE_URL}/pallets/assets/1984/asset-info": ASSET_INFO_USDT})
        client = SidecarClient(BASE_URL, transport)

        record = await client.query_asset_exists(1984)

        assert record == AssetRecord(asset_id="1984", symbol="USDt", decimals=6)
        assert transport.calls == [f"{BASE_URL}/pallets/assets/1984/asset-info"]

    @pytest.mark.asyncio
    async def test_null_asset_info(self) -> None:
        transport = FakeTransport({f"{BASE_URL}/pallets/assets/5/asset-info": ASSET_INFO_EMPTY})
        assert await SidecarClient(BASE_URL, transport).query_asset_exists(5) is None

    @pytest.mark.asyncio
    async def test_not_found(self) -> None:
        assert await SidecarClient(BASE_URL, FakeTransport()).query_asset_exists(5) is None

    @pytest.mark.asyncio
    async def test_symbol_lookup_unavailable(self) -> None:
        transport = FakeTransport()
        assert await SidecarClient(BASE_URL, transport).query_asset_id_by_symbol("USDt") is None
        assert transport.calls == []


# ---------------------------------------------------------------------------
# Foreign assets
# ---------------------------------------------------------------------------


class TestForeignAssetExists:
    @pytest.mark.asyncio
    async def test_match_across_formatting(self) -> None:
        transport = FakeTransport({f"{BASE_URL}/pallets/foreign-assets": FOREIGN_ASSETS})
        assert await SidecarClient(BASE_URL, transport).query_foreign_asset_exists(TNKR) is True

    @pytest.mark.asyncio
    async def test_separator_in_response(self) -> None:
        transport = FakeTransport({f"{BASE_URL}/pallets/foreign-assets": FOREIGN_ASSETS})
        location = '{"parents":"1","interior":{"X1":{"Parachain":"2023"}}}'
        assert await SidecarClient(BASE_URL, transport).query_foreign_asset_exists(location) is True

    @pytest.mark.asyncio
    async def test_no_match(self) -> None:
        transport = FakeTransport({f"{BASE_URL}/pallets/foreign-assets": FOREIGN_ASSETS})
        location = '{"parents":"1","interior":{"X1":{"Parachain":"9999"}}}'
        assert await SidecarClient(BASE_URL, transport).query_foreign_asset_exists(location) is False

    @pytest.mark.asyncio
    async def test_unexpected_body(self) -> None:
        transport = FakeTransport({f"{BASE_URL}/pallets/foreign-assets": ["not", "an", "object"]})
        assert await SidecarClient(BASE_URL, transport).query_foreign_asset_exists(TNKR) is False


# ---------------------------------------------------------------------------
# Liquidity pools
# ---------------------------------------------------------------------------


class TestLiquidPoolValidity:
    @pytest.mark.asyncio
    async def test_registry_hit_skips_request(self) -> None:
        transport = FakeTransport()
        await SidecarClient(BASE_URL, transport).query_liquid_pool_validity(_asset_hub(), "0")
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_chain_hit(self) -> None:
        transport = FakeTransport({f"{BASE_URL}/pallets/pool-assets/42/asset-info": POOL_ASSET_INFO})
        await SidecarClient(BASE_URL, transport).query_liquid_pool_validity(_asset_hub(), "42")
        assert transport.calls == [f"{BASE_URL}/pallets/pool-assets/42/asset-info"]

    @pytest.mark.asyncio
    async def test_unknown_pool(self) -> None:
        with pytest.raises(TransferError) as exc_info:
            await SidecarClient(BASE_URL, FakeTransport()).query_liquid_pool_validity(_asset_hub(), "42")
        assert exc_info.value.kind == ErrorKind.LIQUID_TOKEN_INVALID
        assert "LiquidToken: 42" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_non_integer(self) -> None:
        transport = FakeTransport()
        with pytest.raises(TransferError) as exc_info:
            await SidecarClient(BASE_URL, transport).query_liquid_pool_validity(_asset_hub(), "lp-1")
        assert exc_info.value.kind == ErrorKind.LIQUID_TOKEN_INVALID
        assert transport.calls == []


# ---------------------------------------------------------------------------
# Account nonce
# ---------------------------------------------------------------------------


class TestAccountNonce:
    @pytest.mark.asyncio
    async def test_parsed(self) -> None:
        transport = FakeTransport({f"{BASE_URL}/accounts/5F/balance-info": BALANCE_INFO})
        assert await SidecarClient(BASE_URL, transport).query_account_nonce("5F") == 17

    @pytest.mark.asyncio
    async def test_missing(self) -> None:
        with pytest.raises(ValueError):
            await SidecarClient(BASE_URL, FakeTransport()).query_account_nonce("5F")


# ---------------------------------------------------------------------------
# Transport failures
# ---------------------------------------------------------------------------


class TestTransportFailures:
    @pytest.mark.asyncio
    async def test_error_propagates(self) -> None:
        client = SidecarClient(BASE_URL, ErrorTransport(httpx.ConnectTimeout("timed out")))
        with pytest.raises(httpx.ConnectTimeout):
            await client.query_asset_exists(1984)


class TestHttpxTransport:
    @pytest.mark.asyncio
    async def test_json_body(self, httpx_mock: HTTPXMock) -> None:
        url = f"{BASE_URL}/pallets/assets/1984/asset-info"
        httpx_mock.add_response(url=url, json=ASSET_INFO_USDT)

        client = SidecarClient(BASE_URL, HttpxTransport(timeout=5))
        record = await client.query_asset_exists(1984)

        assert record is not None
        assert record.symbol == "USDt"
        request = httpx_mock.get_request()
        assert request is not None
        assert request.headers["Accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_404_is_none(self, httpx_mock: HTTPXMock) -> None:
        url = f"{BASE_URL}/pallets/pool-assets/9/asset-info"
        httpx_mock.add_response(url=url, status_code=404, json={"code": 404, "message": "not found"})

        assert await HttpxTransport(timeout=5).get_json(url) is None

    @pytest.mark.asyncio
    async def test_server_error_raises(self, httpx_mock: HTTPXMock) -> None:
        url = f"{BASE_URL}/pallets/foreign-assets"
        httpx_mock.add_response(url=url, status_code=500, text="internal error")

        client = SidecarClient(BASE_URL, HttpxTransport(timeout=5))
        with pytest.raises(httpx.HTTPStatusError):
            await client.query_foreign_asset_exists(TNKR)
