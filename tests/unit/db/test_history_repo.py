from chainhistory.db.repos.history_repo import HistoryRepo
from chainhistory.db.repos.parse_error_repo import ParseErrorRepo
from chainhistory.parser.utils.types import AssetTransfer, ExtrinsicSummary, HistoryEntry, NativeTransfer

ALICE = "5GrwvaEF5zXb26Fz9rcQpDWS57CtERHpNehXCPcNoHGKutQY"
BOB = "5FHneW46xGXgs5mUiveU4sbTyGBzmstUspZC92UhjJM694ty"


def _entry(suffix: str, address: str, block: int = 10, **payload) -> HistoryEntry:
    return HistoryEntry(
        id=f"{block}-2{suffix}",
        block_number=block,
        timestamp=1700000000,
        address=address,
        extrinsic_hash="0xhash",
        extrinsic_idx=2,
        **payload,
    )


class TestHistoryRepo:
    async def test_save_and_get_transfer(self, session):
        repo = HistoryRepo(session)
        transfer = NativeTransfer(from_address=ALICE, to_address=BOB, amount="100", fee="1")
        await repo.save(_entry("-from", ALICE, transfer=transfer))

        found = await repo.get("10-2-from")
        assert found is not None
        assert found.transfer == transfer
        assert found.asset_transfer is None

    async def test_asset_transfer_round_trips_variant(self, session):
        repo = HistoryRepo(session)
        transfer = AssetTransfer(from_address=ALICE, to_address=BOB, amount="5", fee="1", asset_id="1984")
        await repo.save(_entry("-to", BOB, asset_transfer=transfer))

        found = await repo.get("10-2-to")
        assert isinstance(found.asset_transfer, AssetTransfer)
        assert found.asset_transfer.asset_id == "1984"

    async def test_save_is_idempotent(self, session):
        repo = HistoryRepo(session)
        summary = ExtrinsicSummary(hash="0xhash", module="staking", call="bond", success=False, fee="3")
        await repo.save(_entry("-extrinsic", ALICE, extrinsic=summary))
        await repo.save(_entry("-extrinsic", ALICE, extrinsic=summary))

        assert len(await repo.list_for_extrinsic(10, 2)) == 1

    async def test_get_missing(self, session):
        assert await HistoryRepo(session).get("1-1-from") is None

    async def test_list_for_address_newest_first(self, session):
        repo = HistoryRepo(session)
        summary = ExtrinsicSummary(hash="0xhash", module="system", call="remark", success=True, fee="0")
        for block in (5, 7, 6):
            await repo.save(_entry("-extrinsic", ALICE, block=block, extrinsic=summary))
        await repo.save(_entry("-extrinsic", BOB, block=8, extrinsic=summary))

        entries = await repo.list_for_address(ALICE)
        assert [e.block_number for e in entries] == [7, 6, 5]


class TestParseErrorRepo:
    async def test_create_and_list(self, session):
        repo = ParseErrorRepo(session)
        await repo.create("10-2", 10, "MalformedCallArguments", "bad args")
        await repo.create("11-0", 11, "CallTreeTooDeep", "too deep")

        records, total = await repo.list_errors(error_type="MalformedCallArguments")
        assert total == 1
        assert records[0].extrinsic_id == "10-2"
        assert await repo.get_summary() == {"MalformedCallArguments": 1, "CallTreeTooDeep": 1}
