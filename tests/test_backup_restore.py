import io
import json
import zipfile
from datetime import date, datetime

import pytest

from household_hub.models.budget import BudgetCategoryGroup
from household_hub.models.household import Household
from household_hub.models.misc_asset import MiscAsset, MiscAssetOwner, MiscAssetType
from household_hub.models.net_worth import NetWorthSnapshot
from household_hub.models.pension import (
    PensionAccount,
    PensionAccountOwner,
    PensionAccountType,
    PensionDeposit,
)
from household_hub.models.profile import Profile
from household_hub.models.stock import (
    StockAccount,
    StockAccountOwner,
    StockHolding,
    StockPriceHistory,
)
from household_hub.models.user import User
from household_hub.repositories.backup_repository import BackupRepository
from household_hub.services import backup_service
from household_hub.core.exceptions import ConflictException
from household_hub.services.backup_service import (
    BACKUP_TABLES,
    DELETE_ORDER,
    INSERT_ORDER,
    BackupService,
)
from tests.conftest import ALICE


@pytest.fixture
def finances(db_session, family):
    """One resource of every kind, owned inside the Cohen household"""
    alice_user = db_session.query(User).filter_by(email=ALICE).one()

    account = StockAccount(name="Brokerage", broker="IBKR", currency="USD", user_id=alice_user.id)
    pension = PensionAccount(
        type=PensionAccountType.HISHTALMUT,
        provider_name="Meitav",
        account_name="Study fund",
        current_value=84250.75,
        fee_from_deposit=0,
        fee_from_total=0.65,
    )
    loan = MiscAsset(
        type=MiscAssetType.MORTGAGE,
        name="Apartment",
        current_value=-650000,
        interest_rate=3.875,
        monthly_payment=4210.5,
        maturity_date=date(2041, 6, 1),
    )
    db_session.add_all([account, pension, loan])
    db_session.flush()

    db_session.add_all(
        [
            StockAccountOwner(account_id=account.id, profile_id=family.alice.id),
            StockAccountOwner(account_id=account.id, profile_id=family.bob.id),
            StockHolding(account_id=account.id, symbol="VTI", quantity=12.5, avg_cost_basis=212.3456),
            StockPriceHistory(symbol="VTI", price=245.1, timestamp=datetime(2026, 3, 2, 21, 0, 0, 123456)),
            PensionAccountOwner(account_id=pension.id, profile_id=family.dana.id),
            PensionDeposit(
                account_id=pension.id,
                deposit_date=date(2026, 2, 10),
                salary_month=date(2026, 1, 1),
                amount=1520.4,
                employer="Acme",
            ),
            MiscAssetOwner(asset_id=loan.id, profile_id=family.alice.id),
            NetWorthSnapshot(
                user_id=alice_user.id,
                date=date(2026, 3, 1),
                net_worth=-500000.25,
                portfolio=2653.75,
                pension=84250.75,
                assets=-650000,
            ),
            BudgetCategoryGroup(name="Fixed", household_id=family.household.id),
        ]
    )
    db_session.commit()
    return {"account": account, "pension": pension, "loan": loan}


def download(client, headers) -> bytes:
    response = client.get("/api/backup", headers=headers)
    assert response.status_code == 200, response.text
    return response.content


def upload(client, headers, content: bytes, filename: str = "backup.zip"):
    return client.post(
        "/api/restore",
        headers=headers,
        files={"file": (filename, content, "application/zip")},
    )


def read_archive(content: bytes) -> dict:
    with zipfile.ZipFile(io.BytesIO(content)) as archive:
        return {name: json.loads(archive.read(name)) for name in archive.namelist()}


def make_archive(documents: dict, compression: int = zipfile.ZIP_STORED) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression) as archive:
        for name, document in documents.items():
            archive.writestr(name, document if isinstance(document, str) else json.dumps(document))
    return buffer.getvalue()


def table_documents(content: bytes) -> dict:
    documents = read_archive(content)
    documents.pop("metadata.json")
    return documents


@pytest.fixture
def delete_spy(monkeypatch):
    """Records every table delete_all is called for"""
    calls = []
    original = BackupRepository.delete_all

    def spy(self, model):
        calls.append(model)
        return original(self, model)

    monkeypatch.setattr(BackupRepository, "delete_all", spy)
    return calls


@pytest.fixture
def insert_spy(monkeypatch):
    """Records every table insert_many is called for"""
    calls = []
    original = BackupRepository.insert_many

    def spy(self, model, rows):
        calls.append(model)
        return original(self, model, rows)

    monkeypatch.setattr(BackupRepository, "insert_many", spy)
    return calls


class TestTableOrder:
    """Foreign key order of the restore phases"""

    def test_every_table_is_ordered_once(self):
        models = [table.model for table in BACKUP_TABLES]

        assert len(DELETE_ORDER) == 14
        assert set(DELETE_ORDER) == set(models)
        assert len(set(DELETE_ORDER)) == len(DELETE_ORDER)

    def test_children_deleted_before_parents(self):
        position = {model.__table__.name: i for i, model in enumerate(DELETE_ORDER)}

        for model in DELETE_ORDER:
            for fk in model.__table__.foreign_keys:
                parent = fk.column.table.name
                assert position[model.__table__.name] < position[parent], (
                    f"{model.__tablename__} must be deleted before {parent}"
                )

    def test_insert_order_is_reverse_of_delete_order(self):
        assert INSERT_ORDER == tuple(reversed(DELETE_ORDER))

    def test_restore_runs_phases_in_order(
        self, client, finances, alice_headers, delete_spy, insert_spy
    ):
        archive = download(client, alice_headers)

        assert upload(client, alice_headers, archive).status_code == 200

        assert delete_spy == list(DELETE_ORDER)
        assert insert_spy == list(INSERT_ORDER)
        inserted = [model.__table__.name for model in insert_spy]
        for position, model in enumerate(insert_spy):
            for fk in model.__table__.foreign_keys:
                assert inserted.index(fk.column.table.name) < position, (
                    f"{fk.column.table.name} must be inserted before {model.__tablename__}"
                )

    def test_empty_tables_are_not_inserted(self, client, family, alice_headers, insert_spy):
        archive = download(client, alice_headers)

        assert upload(client, alice_headers, archive).status_code == 200

        assert StockAccount not in insert_spy
        assert insert_spy[:2] == [User, Profile]


class TestBackup:
    """Tests for GET /api/backup"""

    def test_archive_contents(self, client, finances, alice_headers):
        response = client.get("/api/backup", headers=alice_headers)

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/zip"
        assert response.headers["content-disposition"].startswith('attachment; filename="hub-backup-')

        documents = read_archive(response.content)
        assert set(documents) == {"metadata.json"} | {t.file_name for t in BACKUP_TABLES}
        assert "budget_category_groups.json" not in documents

    def test_metadata(self, client, finances, alice_headers):
        metadata = read_archive(download(client, alice_headers))["metadata.json"]

        assert metadata["schemaVersion"] == "1.0"
        assert metadata["createdBy"] == ALICE
        assert metadata["backupDate"].endswith("Z")
        assert metadata["counts"]["users"] == 4
        assert metadata["counts"]["profiles"] == 5
        assert metadata["counts"]["householdMembers"] == 5
        assert metadata["counts"]["stockAccountOwners"] == 2
        assert metadata["counts"]["netWorthSnapshots"] == 1
        assert len(metadata["counts"]) == 14

    def test_rows_are_camel_case_with_plain_numbers(self, client, finances, alice_headers):
        documents = read_archive(download(client, alice_headers))

        loan = documents["misc_assets.json"][0]
        assert loan["currentValue"] == -650000
        assert isinstance(loan["currentValue"], float)
        assert loan["interestRate"] == 3.875
        assert loan["monthlyPayment"] == 4210.5
        assert loan["maturityDate"] == "2041-06-01"
        assert loan["type"] == "mortgage"

        holding = documents["stock_holdings.json"][0]
        assert holding["quantity"] == 12.5
        assert holding["avgCostBasis"] == 212.3456
        assert holding["accountId"] == finances["account"].id

        price = documents["stock_price_history.json"][0]
        assert price["timestamp"] == "2026-03-02T21:00:00.123456"

        member = documents["household_members.json"][0]
        assert set(member) == {"id", "householdId", "profileId", "role", "joinedAt"}

    def test_backup_requires_auth(self, client):
        assert client.get("/api/backup").status_code == 401


class TestRestore:
    """Tests for POST /api/restore"""

    def test_round_trip(self, client, db_session, finances, alice_headers):
        archive = download(client, alice_headers)

        # Diverge from the archive before restoring it
        db_session.delete(db_session.query(Household).filter_by(name="Carol Home").one())
        db_session.add(StockPriceHistory(symbol="QQQ", price=1))
        db_session.commit()

        response = upload(client, alice_headers, archive)

        assert response.status_code == 200, response.text
        body = response.json()
        assert body["message"] == "Database restored successfully"
        assert body["metadata"]["counts"]["households"] == 2
        assert body["metadata"]["backupDate"] == read_archive(archive)["metadata.json"]["backupDate"]

        assert table_documents(download(client, alice_headers)) == table_documents(archive)

    def test_restore_is_idempotent(self, client, finances, alice_headers):
        archive = download(client, alice_headers)

        assert upload(client, alice_headers, archive).status_code == 200
        first = table_documents(download(client, alice_headers))
        assert upload(client, alice_headers, archive).status_code == 200
        second = table_documents(download(client, alice_headers))

        assert first == second == table_documents(archive)

    def test_restore_removes_budget_data(self, client, db_session, finances, alice_headers):
        archive = download(client, alice_headers)

        assert upload(client, alice_headers, archive).status_code == 200

        db_session.expire_all()
        assert db_session.query(BudgetCategoryGroup).count() == 0
        assert db_session.query(Household).count() == 2

    def test_empty_tables_are_skipped(self, client, db_session, family, alice_headers):
        archive = download(client, alice_headers)

        response = upload(client, alice_headers, archive)

        assert response.status_code == 200
        assert response.json()["metadata"]["counts"]["stockAccounts"] == 0
        db_session.expire_all()
        assert db_session.query(StockAccount).count() == 0
        assert db_session.query(Profile).count() == 5

    def test_missing_table_document_restores_as_empty(self, client, db_session, finances, alice_headers):
        documents = read_archive(download(client, alice_headers))
        del documents["stock_price_history.json"]

        response = upload(client, alice_headers, make_archive(documents))

        assert response.status_code == 200
        db_session.expire_all()
        assert db_session.query(StockPriceHistory).count() == 0
        assert db_session.query(StockHolding).count() == 1

    def test_zoned_timestamps_are_accepted(self, client, db_session, finances, alice_headers):
        documents = read_archive(download(client, alice_headers))
        documents["stock_price_history.json"][0]["timestamp"] = "2026-03-02T23:00:00.123+02:00"

        response = upload(client, alice_headers, make_archive(documents))

        assert response.status_code == 200
        db_session.expire_all()
        price = db_session.query(StockPriceHistory).one()
        assert price.timestamp == datetime(2026, 3, 2, 21, 0, 0, 123000)

    def test_no_file(self, client, family, alice_headers):
        response = client.post("/api/restore", headers=alice_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "No file uploaded"

    def test_not_a_zip(self, client, db_session, finances, alice_headers, delete_spy):
        response = upload(client, alice_headers, b"definitely not a zip", "backup.txt")

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid backup: not a zip archive"
        assert delete_spy == []

    def test_missing_metadata(self, client, finances, alice_headers, delete_spy):
        documents = table_documents(download(client, alice_headers))

        response = upload(client, alice_headers, make_archive(documents))

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid backup: missing metadata.json"
        assert delete_spy == []

    def test_unsupported_schema_version(self, client, db_session, finances, alice_headers, delete_spy):
        documents = read_archive(download(client, alice_headers))
        documents["metadata.json"]["schemaVersion"] = "2.0"

        response = upload(client, alice_headers, make_archive(documents))

        assert response.status_code == 400
        assert response.json()["detail"] == "Unsupported schema version: 2.0"
        assert delete_spy == []
        assert db_session.query(StockAccount).count() == 1

    @pytest.mark.parametrize("version", [2, 1.0, None], ids=["integer", "float", "null"])
    def test_non_string_schema_version(
        self, client, db_session, finances, alice_headers, delete_spy, version
    ):
        documents = read_archive(download(client, alice_headers))
        documents["metadata.json"]["schemaVersion"] = version

        response = upload(client, alice_headers, make_archive(documents))

        assert response.status_code == 400
        assert response.json()["detail"] == f"Unsupported schema version: {version}"
        assert delete_spy == []
        assert db_session.query(StockAccount).count() == 1

    def test_corrupted_entry_fails_before_deleting(
        self, client, db_session, finances, alice_headers, delete_spy
    ):
        documents = read_archive(download(client, alice_headers))
        content = bytearray(make_archive(documents))
        users = json.dumps(documents["users.json"]).encode()
        offset = content.index(users)
        content[offset + 1] ^= 0x01

        response = upload(client, alice_headers, bytes(content))

        assert response.status_code == 500
        assert response.json()["detail"].startswith("users.json")
        assert "CRC" in response.json()["detail"]
        assert delete_spy == []
        assert db_session.query(User).count() == 4

    def test_malformed_table_fails_before_deleting(
        self, client, db_session, finances, alice_headers, delete_spy
    ):
        documents = read_archive(download(client, alice_headers))
        documents["misc_assets.json"] = "{not json"

        response = upload(client, alice_headers, make_archive(documents))

        assert response.status_code == 500
        assert response.json()["detail"].startswith("misc_assets.json")
        assert delete_spy == []
        assert db_session.query(MiscAsset).count() == 1

    def test_failed_insert_rolls_back(self, client, db_session, finances, alice_headers, delete_spy):
        documents = read_archive(download(client, alice_headers))
        documents["household_members.json"][0]["profileId"] = "missing-profile"

        response = upload(client, alice_headers, make_archive(documents))

        assert response.status_code == 500
        assert len(delete_spy) == 14
        db_session.expire_all()
        assert db_session.query(StockAccount).count() == 1
        assert db_session.query(Household).count() == 2
        assert db_session.query(BudgetCategoryGroup).count() == 1

    def test_concurrent_restore_rejected(self, client, finances, alice_headers, delete_spy):
        archive = download(client, alice_headers)

        assert backup_service._restore_lock.acquire(blocking=False)
        try:
            response = upload(client, alice_headers, archive)
        finally:
            backup_service._restore_lock.release()

        assert response.status_code == 409
        assert response.json()["detail"] == "A restore is already in progress"
        assert delete_spy == []

    def test_lock_is_held_while_writing(self, client, db_session, finances, alice_headers, monkeypatch):
        archive = download(client, alice_headers)
        original = BackupRepository.delete_all
        rejected = []

        def delete_all(self, model):
            if not rejected:
                try:
                    BackupService(db_session).restore(archive)
                except ConflictException as e:
                    rejected.append(str(e))
            return original(self, model)

        monkeypatch.setattr(BackupRepository, "delete_all", delete_all)

        response = upload(client, alice_headers, archive)

        assert response.status_code == 200
        assert rejected == ["A restore is already in progress"]
        assert not backup_service._restore_lock.locked()

    def test_restore_requires_auth(self, client):
        response = client.post(
            "/api/restore", files={"file": ("backup.zip", b"irrelevant", "application/zip")}
        )
        assert response.status_code == 401
