"""
Chain registry — static topology snapshot for the known relay networks.

The snapshot is a bundled JSON document keyed by relay name, each relay
mapping chain ids (0 = relay, >0 = parachain id) to a topology record:

    {
      "kusama": {
        "1000": {
          "specName": "asset-hub-kusama",
          "tokens": ["KSM"],
          "assetsInfo": {"1984": "USDt"},
          "foreignAssetsInfo": {"TNKR": {"symbol": ..., "multiLocation": ...}},
          "poolPairsInfo": {"0": {"lpToken": "0", "pairInfo": ...}}
        }
      }
    }

The snapshot is validated against ``snapshot.schema.json`` at load and
never mutated afterwards. Staleness is accepted: callers that miss in
the registry fall back to a live ChainClient query.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import StrEnum
from functools import lru_cache
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, cast

import jsonschema  # type: ignore[import-untyped]

from asset_transfer.config import settings
from asset_transfer.errors import ErrorKind, TransferError
from asset_transfer.logger import get_logger
from asset_transfer.multilocation import same_location

log = get_logger(__name__)

RELAY_CHAIN_ID = 0

# Parachain ids below this value are reserved for system parachains.
SYSTEM_PARACHAIN_ID_CEILING = 2000

# Minimum id reserved for system parachains.
SYSTEM_PARACHAIN_ID_FLOOR = 1000


class ChainRole(StrEnum):
    """Topological role of a chain relative to its relay."""

    RELAY = "Relay"
    SYSTEM_PARACHAIN = "SystemParachain"
    PARACHAIN = "Parachain"


def role_for_chain_id(chain_id: int) -> ChainRole:
    """Infer the role of a chain from its relay-scoped id."""
    if chain_id == RELAY_CHAIN_ID:
        return ChainRole.RELAY
    if SYSTEM_PARACHAIN_ID_FLOOR <= chain_id < SYSTEM_PARACHAIN_ID_CEILING:
        return ChainRole.SYSTEM_PARACHAIN
    return ChainRole.PARACHAIN


def parse_chain_id(value: str | int) -> int:
    """Validate a chain id given as int or decimal string.

    Raises:
        TransferError(InvalidInput): Negative or non-numeric ids.
    """
    text = str(value).strip()
    if not text.isdigit():
        raise TransferError(f"chain id must be a non-negative integer, got: {value!r}", ErrorKind.INVALID_INPUT)
    return int(text)


# =========================================================================
# Topology records
# =========================================================================


@dataclass(frozen=True)
class ForeignAssetInfo:
    symbol: str
    multi_location: str
    name: str = ""


@dataclass(frozen=True)
class PoolPairInfo:
    lp_token: str
    pair_info: str = ""


@dataclass(frozen=True)
class ChainTopologyInfo:
    """Immutable topology of one chain in the snapshot.

    Attributes:
        spec_name: Runtime spec name (e.g. "asset-hub-kusama").
        chain_id: Relay-scoped chain id.
        role: Relay, system parachain or parachain.
        tokens: Native token symbols, in snapshot order.
        assets_info: Assets-pallet id → symbol.
        foreign_assets_info: Registry key → foreign asset record.
        pool_pairs_info: LP token id → pool pair record.
    """

    spec_name: str
    chain_id: int
    role: ChainRole
    tokens: tuple[str, ...]
    assets_info: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    foreign_assets_info: Mapping[str, ForeignAssetInfo] = field(default_factory=lambda: MappingProxyType({}))
    pool_pairs_info: Mapping[str, PoolPairInfo] = field(default_factory=lambda: MappingProxyType({}))

    def is_native_token(self, symbol: str) -> bool:
        wanted = symbol.lower()
        return any(token.lower() == wanted for token in self.tokens)

    def asset_symbol(self, asset_id: str) -> Optional[str]:
        """Symbol of an assets-pallet id, matching keys case-insensitively."""
        wanted = asset_id.lower()
        for key, symbol in self.assets_info.items():
            if key.lower() == wanted:
                return symbol
        return None

    def asset_id_by_symbol(self, symbol: str) -> Optional[str]:
        """First assets-pallet id whose symbol matches case-insensitively."""
        wanted = symbol.lower()
        for key, asset_symbol in self.assets_info.items():
            if asset_symbol.lower() == wanted:
                return key
        return None

    def has_foreign_asset(self, multi_location: str) -> bool:
        return any(same_location(info.multi_location, multi_location) for info in self.foreign_assets_info.values())

    def has_pool_asset(self, lp_token_id: str) -> bool:
        return any(info.lp_token == lp_token_id for info in self.pool_pairs_info.values())


def _topology_from_record(chain_id: int, record: Mapping[str, Any]) -> ChainTopologyInfo:
    foreign = {
        key: ForeignAssetInfo(
            symbol=str(value["symbol"]),
            multi_location=str(value["multiLocation"]),
            name=str(value.get("name", "")),
        )
        for key, value in record.get("foreignAssetsInfo", {}).items()
    }
    pools = {
        key: PoolPairInfo(lp_token=str(value["lpToken"]), pair_info=str(value.get("pairInfo", "")))
        for key, value in record.get("poolPairsInfo", {}).items()
    }
    return ChainTopologyInfo(
        spec_name=str(record["specName"]),
        chain_id=chain_id,
        role=role_for_chain_id(chain_id),
        tokens=tuple(record["tokens"]),
        assets_info=MappingProxyType(dict(record.get("assetsInfo", {}))),
        foreign_assets_info=MappingProxyType(foreign),
        pool_pairs_info=MappingProxyType(pools),
    )


# =========================================================================
# Snapshot loading
# =========================================================================


def _read_packaged(name: str) -> Dict[str, Any]:
    text = resources.files("asset_transfer.registry").joinpath(name).read_text(encoding="utf-8")
    return cast(Dict[str, Any], json.loads(text))


@lru_cache(maxsize=1)
def _snapshot_schema() -> Dict[str, Any]:
    return _read_packaged("snapshot.schema.json")


def validate_snapshot(snapshot: Dict[str, Any]) -> None:
    """Validate a snapshot document against the bundled JSON Schema.

    Raises:
        jsonschema.ValidationError: If the document does not conform.
    """
    jsonschema.validate(instance=snapshot, schema=_snapshot_schema())


@lru_cache(maxsize=8)
def _load_snapshot_cached(path: str) -> Dict[str, Any]:
    if path:
        snapshot = cast(Dict[str, Any], json.loads(Path(path).read_text(encoding="utf-8")))
    else:
        snapshot = _read_packaged("snapshot.json")
    validate_snapshot(snapshot)
    log.debug("[REGISTRY][LOAD] source=%s relays=%s", path or "bundled", sorted(snapshot))
    return snapshot


def load_snapshot(path: str | Path | None = None) -> Dict[str, Any]:
    """Load and validate the registry snapshot (bundled unless a path is given).

    ``ASSET_TRANSFER_REGISTRY_PATH`` overrides the bundled file when no
    explicit path is passed. Results are cached per path.
    """
    source = str(path) if path is not None else settings.REGISTRY_PATH
    return _load_snapshot_cached(source)


# =========================================================================
# Registry
# =========================================================================


class Registry:
    """Read-only view of one relay network's topology.

    Args:
        relay_name: Relay key in the snapshot ("polkadot", "kusama", ...).
        chains: Chain id → topology for every chain of that relay.
    """

    def __init__(self, relay_name: str, chains: Mapping[int, ChainTopologyInfo]) -> None:
        self._relay_name = relay_name
        self._chains: Mapping[int, ChainTopologyInfo] = MappingProxyType(dict(chains))

    @classmethod
    def from_snapshot(cls, snapshot: Mapping[str, Any], spec_name: str) -> "Registry":
        """Build the registry for the relay whose chains include ``spec_name``.

        Raises:
            TransferError(UnknownChain): No relay knows the spec name.
        """
        wanted = spec_name.lower()
        for relay_name, relay_chains in snapshot.items():
            if any(str(record["specName"]).lower() == wanted for record in relay_chains.values()):
                chains = {
                    int(chain_id): _topology_from_record(int(chain_id), record)
                    for chain_id, record in relay_chains.items()
                }
                return cls(relay_name, chains)
        raise TransferError(f"No registry entry was found for specName {spec_name!r}", ErrorKind.UNKNOWN_CHAIN)

    @classmethod
    def load(cls, spec_name: str, path: str | Path | None = None) -> "Registry":
        return cls.from_snapshot(load_snapshot(path), spec_name)

    @property
    def relay_name(self) -> str:
        return self._relay_name

    @property
    def current_relay_registry(self) -> Mapping[int, ChainTopologyInfo]:
        return self._chains

    @property
    def relay_tokens(self) -> tuple[str, ...]:
        relay = self._chains.get(RELAY_CHAIN_ID)
        return relay.tokens if relay is not None else ()

    def lookup(self, chain_id: int) -> Optional[ChainTopologyInfo]:
        """Topology for ``chain_id``, or None when the snapshot lacks it."""
        return self._chains.get(chain_id)

    def chain_id_by_spec_name(self, spec_name: str) -> int:
        """Relay-scoped chain id for a spec name (case-insensitive).

        Raises:
            TransferError(UnknownChain): Spec name not in this relay.
        """
        wanted = spec_name.lower()
        for chain_id, info in self._chains.items():
            if info.spec_name.lower() == wanted:
                return chain_id
        raise TransferError(
            f"specName {spec_name!r} is not part of the {self._relay_name} registry",
            ErrorKind.UNKNOWN_CHAIN,
        )

    def chain_role(self, chain_id: int) -> ChainRole:
        info = self._chains.get(chain_id)
        return info.role if info is not None else role_for_chain_id(chain_id)
