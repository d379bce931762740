"""Shared fakes for the planning tests — no network."""

from __future__ import annotations

from typing import Iterable, Mapping

import pytest

from asset_transfer.client import AssetRecord
from asset_transfer.errors import ErrorKind, TransferError
from asset_transfer.multilocation import normalize_multilocation
from asset_transfer.registry import ChainTopologyInfo, Registry


class FakeChainClient:
    """In-memory ChainClient recording every query it receives."""

    def __init__(
        self,
        assets: Mapping[int, AssetRecord] | None = None,
        symbols: Mapping[str, str] | None = None,
        foreign_assets: Iterable[str] = (),
        pool_tokens: Iterable[str] = (),
        nonces: Mapping[str, int] | None = None,
    ) -> None:
        self.assets = dict(assets or {})
        self.symbols = {k.lower(): v for k, v in (symbols or {}).items()}
        self.foreign_assets = {normalize_multilocation(m) for m in foreign_assets}
        self.pool_tokens = set(pool_tokens)
        self.nonces = dict(nonces or {})
        self.pool_error = TransferError("No liquid token asset was detected.", ErrorKind.LIQUID_TOKEN_INVALID)
        self.calls: list[tuple[str, object]] = []

    def add_foreign_asset(self, multi_location: str) -> None:
        self.foreign_assets.add(normalize_multilocation(multi_location))

    def called(self, method: str) -> list[object]:
        return [arg for name, arg in self.calls if name == method]

    async def query_asset_exists(self, asset_id: int) -> AssetRecord | None:
        self.calls.append(("query_asset_exists", asset_id))
        return self.assets.get(asset_id)

    async def query_asset_id_by_symbol(self, symbol: str) -> str | None:
        self.calls.append(("query_asset_id_by_symbol", symbol))
        return self.symbols.get(symbol.lower())

    async def query_foreign_asset_exists(self, multi_location: str) -> bool:
        self.calls.append(("query_foreign_asset_exists", multi_location))
        return normalize_multilocation(multi_location) in self.foreign_assets

    async def query_liquid_pool_validity(self, system_chain_info: ChainTopologyInfo, asset_id: str) -> None:
        self.calls.append(("query_liquid_pool_validity", asset_id))
        if asset_id not in self.pool_tokens:
            raise self.pool_error

    async def query_account_nonce(self, address: str) -> int:
        self.calls.append(("query_account_nonce", address))
        return self.nonces.get(address, 0)


class ExplodingChainClient(FakeChainClient):
    """Every query fails at the transport level."""

    def __init__(self, exc: Exception) -> None:
        super().__init__()
        self.exc = exc

    async def query_asset_exists(self, asset_id: int) -> AssetRecord | None:
        raise self.exc

    async def query_asset_id_by_symbol(self, symbol: str) -> str | None:
        raise self.exc

    async def query_foreign_asset_exists(self, multi_location: str) -> bool:
        raise self.exc


@pytest.fixture
def fake_client() -> FakeChainClient:
    return FakeChainClient()


@pytest.fixture
def kusama_registry() -> Registry:
    return Registry.load("asset-hub-kusama")


@pytest.fixture
def polkadot_registry() -> Registry:
    return Registry.load("asset-hub-polkadot")


@pytest.fixture
def exploding_client() -> ExplodingChainClient:
    return ExplodingChainClient(ConnectionError("sidecar unreachable"))
