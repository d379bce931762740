"""
Versioned XCM value types.

Every value is tagged with the XCM version it targets and renders to the
polkadot-js JSON shape for that version. Versions are never mixed inside
one payload.

Wire differences reproduced here:

    - V2 ``AccountId32`` carries ``network: "Any"``; V3+ omit it.
    - V2/V3 wrap asset ids in ``Concrete``; V4 uses the location directly.
    - V2/V3 encode ``X1`` as a single junction; V4 as a one-item list.
    - ``Here`` interiors render as ``{"Here": ""}``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Mapping

from asset_transfer.errors import ErrorKind, TransferError
from asset_transfer.multilocation import canonical_json

U32_MAX = 2**32 - 1

_AMOUNT_RE = re.compile(r"^\d+$")

Junction = Mapping[str, Any]

# Junction variants in their on-chain enum order.
JUNCTION_ORDER = (
    "Parachain",
    "AccountId32",
    "AccountIndex64",
    "AccountKey20",
    "PalletInstance",
    "GeneralIndex",
    "GeneralKey",
    "OnlyChild",
    "Plurality",
    "GlobalConsensus",
)

_NUMERIC_JUNCTIONS = frozenset({"Parachain", "AccountIndex64", "PalletInstance", "GeneralIndex"})


def junction_sort_key(junction: Junction) -> tuple[int, int, str]:
    """Order junctions by variant position, then numerically where the value is an integer."""
    (kind, value), = junction.items()
    rank = JUNCTION_ORDER.index(kind) if kind in JUNCTION_ORDER else len(JUNCTION_ORDER)
    text = str(value).replace(",", "")
    number = int(text) if kind in _NUMERIC_JUNCTIONS and text.isdigit() else 0
    return (rank, number, canonical_json(value))


class XcmVersion(IntEnum):
    V2 = 2
    V3 = 3
    V4 = 4

    @property
    def tag(self) -> str:
        return f"V{self.value}"

    @classmethod
    def parse(cls, value: int | str) -> "XcmVersion":
        """Validate a caller-supplied version number.

        Raises:
            TransferError(InvalidInput): Unsupported version.
        """
        number = -1
        if isinstance(value, int) and not isinstance(value, bool):
            number = value
        elif isinstance(value, str) and value.strip().isdigit():
            number = int(value.strip())

        for version in cls:
            if version.value == number:
                return version
        supported = ", ".join(str(v.value) for v in cls)
        raise TransferError(
            f"xcmVersion {value!r} is not supported; expected one of {supported}",
            ErrorKind.INVALID_INPUT,
        )


# =========================================================================
# Locations
# =========================================================================


@dataclass(frozen=True)
class VersionedLocation:
    """A multi-location targeting one XCM version.

    Attributes:
        version: Target XCM version.
        parents: Number of hops up the topology.
        junctions: Interior junctions, outermost first. Empty means Here.
    """

    version: XcmVersion
    parents: int
    junctions: tuple[Junction, ...] = ()

    def __post_init__(self) -> None:
        if self.parents < 0:
            raise ValueError(f"parents must be >= 0, got: {self.parents}")
        if len(self.junctions) > 8:
            raise ValueError(f"at most 8 junctions allowed, got: {len(self.junctions)}")

    def interior(self) -> dict[str, Any]:
        count = len(self.junctions)
        if count == 0:
            return {"Here": ""}
        if count == 1 and self.version < XcmVersion.V4:
            return {"X1": dict(self.junctions[0])}
        return {f"X{count}": [dict(j) for j in self.junctions]}

    def location_dict(self) -> dict[str, Any]:
        """Unversioned ``{parents, interior}`` body."""
        return {"parents": self.parents, "interior": self.interior()}

    def to_dict(self) -> dict[str, Any]:
        return {self.version.tag: self.location_dict()}

    def sort_key(self) -> tuple[int, int, tuple[tuple[int, int, str], ...]]:
        """Parents, then interior length, then junctions compared structurally."""
        return (self.parents, len(self.junctions), tuple(junction_sort_key(j) for j in self.junctions))


def location_from_json(location: Mapping[str, Any], version: XcmVersion) -> VersionedLocation:
    """Build a VersionedLocation from a parsed multi-location dict.

    Accepts ``Here``, ``X1`` as a junction or one-item list, and ``Xn``
    as a list of junctions.

    Raises:
        TransferError(InvalidInput): Unrecognized interior shape.
    """
    try:
        parents = int(location["parents"])
        interior = location["interior"]
        (key, value), = interior.items()
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise TransferError(f"Unrecognized multi-location {location!r}", ErrorKind.INVALID_INPUT) from exc

    if key == "Here":
        return VersionedLocation(version, parents)
    if not re.match(r"^X[1-8]$", key):
        raise TransferError(f"Unrecognized multi-location interior {key!r}", ErrorKind.INVALID_INPUT)

    junctions = value if isinstance(value, list) else [value]
    if len(junctions) != int(key[1:]) or not all(isinstance(j, dict) for j in junctions):
        raise TransferError(
            f"Multi-location interior {key} does not hold {key[1:]} junction(s)",
            ErrorKind.INVALID_INPUT,
        )
    return VersionedLocation(version, parents, tuple(junctions))


def account_id32(account_id: str, version: XcmVersion) -> Junction:
    """``AccountId32`` junction; V2 additionally names ``network: Any``."""
    if version == XcmVersion.V2:
        return {"AccountId32": {"network": "Any", "id": account_id}}
    return {"AccountId32": {"id": account_id}}


# =========================================================================
# Assets
# =========================================================================


@dataclass(frozen=True)
class FungibleAsset:
    location: VersionedLocation
    amount: str

    def __post_init__(self) -> None:
        if not _AMOUNT_RE.match(self.amount):
            raise TransferError(
                f"amount must be a non-negative integer string, got: {self.amount!r}",
                ErrorKind.INVALID_INPUT,
            )

    def to_dict(self) -> dict[str, Any]:
        if self.location.version >= XcmVersion.V4:
            asset_id: dict[str, Any] = self.location.location_dict()
        else:
            asset_id = {"Concrete": self.location.location_dict()}
        return {"id": asset_id, "fun": {"Fungible": self.amount}}


@dataclass(frozen=True)
class VersionedAssets:
    """Sorted, de-duplicated list of fungible assets for one XCM version."""

    version: XcmVersion
    assets: tuple[FungibleAsset, ...]

    def __post_init__(self) -> None:
        if not self.assets:
            raise ValueError("assets must be non-empty")
        for asset in self.assets:
            if asset.location.version != self.version:
                raise ValueError(
                    f"asset location version {asset.location.version.tag} != {self.version.tag}"
                )

    def __len__(self) -> int:
        return len(self.assets)

    def index_of(self, location: VersionedLocation) -> int | None:
        for index, asset in enumerate(self.assets):
            if asset.location == location:
                return index
        return None

    def to_dict(self) -> dict[str, Any]:
        return {self.version.tag: [asset.to_dict() for asset in self.assets]}


# =========================================================================
# Weight limit
# =========================================================================


@dataclass(frozen=True)
class WeightLimitOptions:
    """Caller's weight-limit request.

    ``Limited`` is only produced when ``is_limited`` is set AND both
    components are present; anything less falls back to ``Unlimited``.
    """

    is_limited: bool = False
    ref_time: str | int | None = None
    proof_size: str | int | None = None


@dataclass(frozen=True)
class WeightLimit:
    version: XcmVersion
    ref_time: str | None = None
    proof_size: str | None = None

    @property
    def is_limited(self) -> bool:
        return self.ref_time is not None and self.proof_size is not None

    def to_dict(self) -> dict[str, Any]:
        if self.is_limited:
            return {"Limited": {"refTime": self.ref_time, "proofSize": self.proof_size}}
        return {"Unlimited": None}


# =========================================================================
# Payload
# =========================================================================


@dataclass(frozen=True)
class XcmPayloadFragments:
    """Builder output: everything an XCM transfer call needs.

    Invariants:
        - All four fragments target the same XcmVersion.
        - 0 <= fee_asset_item < len(assets), and fits in u32.
    """

    beneficiary: VersionedLocation
    destination: VersionedLocation
    assets: VersionedAssets
    weight_limit: WeightLimit
    fee_asset_item: int

    def __post_init__(self) -> None:
        versions = {
            self.beneficiary.version,
            self.destination.version,
            self.assets.version,
            self.weight_limit.version,
        }
        if len(versions) != 1:
            tags = sorted(v.tag for v in versions)
            raise ValueError(f"payload fragments must share one XCM version, got: {tags}")
        if not 0 <= self.fee_asset_item < len(self.assets) or self.fee_asset_item > U32_MAX:
            raise ValueError(
                f"fee_asset_item {self.fee_asset_item} out of range for {len(self.assets)} asset(s)"
            )

    @property
    def version(self) -> XcmVersion:
        return self.assets.version

    def to_call_args(self) -> dict[str, Any]:
        """Arguments in xcm pallet ``limited*`` call order."""
        return {
            "dest": self.destination.to_dict(),
            "beneficiary": self.beneficiary.to_dict(),
            "assets": self.assets.to_dict(),
            "feeAssetItem": self.fee_asset_item,
            "weightLimit": self.weight_limit.to_dict(),
        }
