"""
Tests for cross-chain payload assembly.

Test plan:
- Relay → system: complete V3 call arguments for the native token
- System → para: registry asset plus native token, sorted, fee asset
  index follows paysWithFeeDest
- Para → relay: relay token recognised by symbol on a parachain
- Para → system: foreign multi-location confirmed by the chain
- Rejections: direction not matching the chains, same chain, bad XCM
  version, amount count mismatch, unknown asset; no fragments returned
- Client failures propagate unchanged
"""

import pytest

from asset_transfer.classifier import Direction
from asset_transfer.errors import ErrorKind, TransferError
from asset_transfer.payload import CrossChainRequest, amounts_tuple, build_cross_chain_payload
from asset_transfer.registry import Registry
from asset_transfer.xcm import WeightLimitOptions, XcmVersion

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

ACCOUNT = "0x8eaf04151687736326c9fea17e25fc5287613693c912909cb226aa4794f26a48"
TNKR = '{"parents":"1","interior":{"X2":[{"Parachain":"2125"},{"GeneralIndex":"0"}]}}'


def _make_request(spec_name: str, dest_chain_id: int, amounts: tuple, **kwargs) -> CrossChainRequest:
    return CrossChainRequest(
        spec_name=spec_name,
        dest_chain_id=dest_chain_id,
        dest_address=ACCOUNT,
        amounts=amounts,
        **kwargs,
    )


# ---------------------------------------------------------------------------
# Directions
# ---------------------------------------------------------------------------


class TestRelayToSystem:
    @pytest.mark.asyncio
    async def test_full_call_args(self, fake_client) -> None:
        registry = Registry.load("polkadot")
        request = _make_request("polkadot", 1000, ("1000000000",))

        fragments = await build_cross_chain_payload(
            Direction.RELAY_TO_SYSTEM, request, 3, client=fake_client, registry=registry
        )

        assert fragments.to_call_args() == {
            "dest": {"V3": {"parents": 0, "interior": {"X1": {"Parachain": "1000"}}}},
            "beneficiary": {"V3": {"parents": 0, "interior": {"X1": {"AccountId32": {"id": ACCOUNT}}}}},
            "assets": {
                "V3": [
                    {
                        "id": {"Concrete": {"parents": 0, "interior": {"Here": ""}}},
                        "fun": {"Fungible": "1000000000"},
                    }
                ]
            },
            "feeAssetItem": 0,
            "weightLimit": {"Unlimited": None},
        }
        assert fake_client.calls == []

    @pytest.mark.asyncio
    async def test_v2_named_native_token(self, fake_client) -> None:
        registry = Registry.load("kusama")
        request = _make_request(
            "kusama",
            1000,
            ("5",),
            asset_ids=("ksm",),
            weight_limit=WeightLimitOptions(is_limited=True, ref_time="100", proof_size="200"),
        )

        fragments = await build_cross_chain_payload(
            Direction.RELAY_TO_SYSTEM, request, XcmVersion.V2, client=fake_client, registry=registry
        )

        args = fragments.to_call_args()
        assert args["beneficiary"]["V2"]["interior"]["X1"]["AccountId32"]["network"] == "Any"
        assert args["weightLimit"] == {"Limited": {"refTime": "100", "proofSize": "200"}}


class TestSystemToPara:
    @pytest.mark.asyncio
    async def test_assets_sorted_and_fee_index(self, fake_client, kusama_registry: Registry) -> None:
        request = _make_request(
            "asset-hub-kusama",
            2023,
            ("1000", "2000"),
            asset_ids=("KSM", "USDt"),
            pays_with_fee_dest="KSM",
        )

        fragments = await build_cross_chain_payload(
            Direction.SYSTEM_TO_PARA, request, 3, client=fake_client, registry=kusama_registry
        )

        args = fragments.to_call_args()
        assert args["dest"] == {"V3": {"parents": 1, "interior": {"X1": {"Parachain": "2023"}}}}
        assert args["assets"]["V3"] == [
            {
                "id": {
                    "Concrete": {
                        "parents": 0,
                        "interior": {"X2": [{"PalletInstance": "50"}, {"GeneralIndex": "1984"}]},
                    }
                },
                "fun": {"Fungible": "2000"},
            },
            {"id": {"Concrete": {"parents": 1, "interior": {"Here": ""}}}, "fun": {"Fungible": "1000"}},
        ]
        assert args["feeAssetItem"] == 1

    @pytest.mark.asyncio
    async def test_v4_payload(self, fake_client, kusama_registry: Registry) -> None:
        request = _make_request("asset-hub-kusama", 2023, ("1",), asset_ids=("1984",))

        fragments = await build_cross_chain_payload(
            Direction.SYSTEM_TO_PARA, request, 4, client=fake_client, registry=kusama_registry
        )

        assert fragments.version == XcmVersion.V4
        assert fragments.to_call_args()["dest"] == {"V4": {"parents": 1, "interior": {"X1": [{"Parachain": "2023"}]}}}


class TestFromPara:
    @pytest.mark.asyncio
    async def test_relay_token_to_relay(self, fake_client, kusama_registry: Registry) -> None:
        request = _make_request("moonriver", 0, ("10",), asset_ids=("KSM",))

        fragments = await build_cross_chain_payload(
            Direction.PARA_TO_RELAY, request, 3, client=fake_client, registry=kusama_registry
        )

        args = fragments.to_call_args()
        assert args["dest"] == {"V3": {"parents": 1, "interior": {"Here": ""}}}
        assert args["assets"]["V3"][0]["id"] == {"Concrete": {"parents": 1, "interior": {"Here": ""}}}
        assert fake_client.calls == []

    @pytest.mark.asyncio
    async def test_foreign_asset_to_system(self, fake_client, kusama_registry: Registry) -> None:
        fake_client.add_foreign_asset(TNKR)
        request = _make_request(
            "moonriver", 1000, ("5",), asset_ids=(TNKR,), is_foreign_assets_transfer=True
        )

        fragments = await build_cross_chain_payload(
            Direction.PARA_TO_SYSTEM, request, 3, client=fake_client, registry=kusama_registry
        )

        assert fragments.to_call_args()["assets"]["V3"] == [
            {
                "id": {
                    "Concrete": {
                        "parents": 1,
                        "interior": {"X2": [{"Parachain": "2125"}, {"GeneralIndex": "0"}]},
                    }
                },
                "fun": {"Fungible": "5"},
            }
        ]
        assert fake_client.called("query_foreign_asset_exists") == [TNKR]


# ---------------------------------------------------------------------------
# Rejections
# ---------------------------------------------------------------------------


class TestRejections:
    @pytest.mark.asyncio
    async def test_direction_mismatch(self, fake_client, kusama_registry: Registry) -> None:
        request = _make_request("asset-hub-kusama", 2023, ("1",))
        with pytest.raises(TransferError) as exc_info:
            await build_cross_chain_payload(
                Direction.SYSTEM_TO_RELAY, request, 3, client=fake_client, registry=kusama_registry
            )
        assert exc_info.value.kind == ErrorKind.INVALID_INPUT

    @pytest.mark.asyncio
    async def test_same_chain(self, fake_client, kusama_registry: Registry) -> None:
        request = _make_request("asset-hub-kusama", 1000, ("1",))
        with pytest.raises(TransferError) as exc_info:
            await build_cross_chain_payload(
                Direction.SYSTEM_TO_SYSTEM, request, 3, client=fake_client, registry=kusama_registry
            )
        assert exc_info.value.kind == ErrorKind.INVALID_INPUT

    @pytest.mark.asyncio
    async def test_unsupported_version(self, fake_client, kusama_registry: Registry) -> None:
        request = _make_request("kusama", 1000, ("1",))
        with pytest.raises(TransferError) as exc_info:
            await build_cross_chain_payload(
                Direction.RELAY_TO_SYSTEM, request, 5, client=fake_client, registry=kusama_registry
            )
        assert exc_info.value.kind == ErrorKind.INVALID_INPUT

    @pytest.mark.asyncio
    async def test_amount_count_mismatch(self, fake_client, kusama_registry: Registry) -> None:
        request = _make_request("asset-hub-kusama", 2023, ("1",), asset_ids=("KSM", "USDt"))
        with pytest.raises(TransferError) as exc_info:
            await build_cross_chain_payload(
                Direction.SYSTEM_TO_PARA, request, 3, client=fake_client, registry=kusama_registry
            )
        assert exc_info.value.kind == ErrorKind.INVALID_INPUT

    @pytest.mark.asyncio
    async def test_unknown_asset(self, fake_client, kusama_registry: Registry) -> None:
        request = _make_request("asset-hub-kusama", 2023, ("1",), asset_ids=("999999",))
        with pytest.raises(TransferError) as exc_info:
            await build_cross_chain_payload(
                Direction.SYSTEM_TO_PARA, request, 3, client=fake_client, registry=kusama_registry
            )
        assert exc_info.value.kind == ErrorKind.ASSET_NOT_FOUND
        assert fake_client.called("query_asset_exists") == [999999]

    @pytest.mark.asyncio
    async def test_unknown_origin(self, fake_client, kusama_registry: Registry) -> None:
        request = _make_request("moonbeam", 1000, ("1",))
        with pytest.raises(TransferError) as exc_info:
            await build_cross_chain_payload(
                Direction.PARA_TO_SYSTEM, request, 3, client=fake_client, registry=kusama_registry
            )
        assert exc_info.value.kind == ErrorKind.UNKNOWN_CHAIN

    @pytest.mark.asyncio
    async def test_client_failure_propagates(self, exploding_client, kusama_registry: Registry) -> None:
        request = _make_request("asset-hub-kusama", 2023, ("1",), asset_ids=("999999",))
        with pytest.raises(ConnectionError):
            await build_cross_chain_payload(
                Direction.SYSTEM_TO_PARA, request, 3, client=exploding_client, registry=kusama_registry
            )


def test_amounts_tuple() -> None:
    assert amounts_tuple([1, " 2 ", "3"]) == ("1", "2", "3")
