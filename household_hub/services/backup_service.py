import io
import json
import threading
import zipfile
import zlib
from dataclasses import dataclass

import structlog
from pydantic import TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel
from sqlalchemy.orm import Session

from household_hub.config import settings
from household_hub.models.base import Base, utcnow
from household_hub.models.user import User
from household_hub.models.profile import Profile
from household_hub.models.household import Household
from household_hub.models.household_member import HouseholdMember
from household_hub.models.stock import (
    StockAccount,
    StockAccountOwner,
    StockHolding,
    StockPriceHistory,
)
from household_hub.models.pension import PensionAccount, PensionAccountOwner, PensionDeposit
from household_hub.models.misc_asset import MiscAsset, MiscAssetOwner
from household_hub.models.net_worth import NetWorthSnapshot
from household_hub.repositories.backup_repository import BackupRepository
from household_hub.schemas import backup_schemas as rows
from household_hub.core.exceptions import (
    ConflictException,
    RestoreFailedException,
    ValidationException,
)

logger = structlog.get_logger(__name__)

BACKUP_SCHEMA_VERSION = "1.0"
METADATA_FILE = "metadata.json"


@dataclass(frozen=True)
class BackupTable:
    """One table of the archive: <table>.json holding a list of rows"""

    model: type[Base]
    row_schema: type[rows.BackupRow]

    @property
    def file_name(self) -> str:
        return f"{self.model.__tablename__}.json"

    @property
    def count_key(self) -> str:
        return to_camel(self.model.__tablename__)


BACKUP_TABLES = (
    BackupTable(User, rows.UserRow),
    BackupTable(Profile, rows.ProfileRow),
    BackupTable(Household, rows.HouseholdRow),
    BackupTable(HouseholdMember, rows.HouseholdMemberRow),
    BackupTable(StockAccount, rows.StockAccountRow),
    BackupTable(StockAccountOwner, rows.StockAccountOwnerRow),
    BackupTable(StockHolding, rows.StockHoldingRow),
    BackupTable(StockPriceHistory, rows.StockPriceHistoryRow),
    BackupTable(PensionAccount, rows.PensionAccountRow),
    BackupTable(PensionAccountOwner, rows.PensionAccountOwnerRow),
    BackupTable(PensionDeposit, rows.PensionDepositRow),
    BackupTable(MiscAsset, rows.MiscAssetRow),
    BackupTable(MiscAssetOwner, rows.MiscAssetOwnerRow),
    BackupTable(NetWorthSnapshot, rows.NetWorthSnapshotRow),
)

# Children before the parents they reference
DELETE_ORDER = (
    NetWorthSnapshot,
    StockPriceHistory,
    StockHolding,
    StockAccountOwner,
    StockAccount,
    PensionDeposit,
    PensionAccountOwner,
    PensionAccount,
    MiscAssetOwner,
    MiscAsset,
    HouseholdMember,
    Household,
    Profile,
    User,
)
INSERT_ORDER = tuple(reversed(DELETE_ORDER))

_restore_lock = threading.Lock()


class BackupService:
    """
    Full-database export and restore.

    Budget tables are not part of the archive. A restore replaces
    households, so their budget data is removed with them.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = BackupRepository(db)

    def export(self, user: User) -> tuple[str, bytes]:
        """
        Build a backup archive of every table.

        Returns:
            Tuple of (download filename, zip bytes)
        """
        now = utcnow()
        documents = {}
        counts = {}
        for table in BACKUP_TABLES:
            documents[table.file_name] = [
                table.row_schema.model_validate(obj).model_dump(mode="json", by_alias=True)
                for obj in self.repo.fetch_all(table.model)
            ]
            counts[table.count_key] = len(documents[table.file_name])

        metadata = rows.BackupMetadata(
            backup_date=now.isoformat(timespec="milliseconds") + "Z",
            schema_version=BACKUP_SCHEMA_VERSION,
            created_by=user.email,
            counts=counts,
        )

        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
            archive.writestr(METADATA_FILE, metadata.model_dump_json(by_alias=True, indent=2))
            for file_name, document in documents.items():
                archive.writestr(file_name, json.dumps(document, indent=2))

        logger.info("backup_created", created_by=user.email, **counts)
        filename = f"{settings.BACKUP_FILENAME_PREFIX}-{now.date().isoformat()}.zip"
        return filename, buffer.getvalue()

    def restore(self, content: bytes) -> rows.BackupMetadata:
        """
        Replace the whole dataset with the archive's contents.

        Flow:
        1. Open the archive and check metadata.json and its schema version
        2. Parse every table document; a missing one restores as empty
        3. Delete all tables leaf to root, insert root to leaf, commit once

        Nothing is deleted unless steps 1 and 2 succeed. A failure in step 3
        rolls the transaction back.

        Raises:
            ValidationException: Not a zip, missing metadata, unsupported version
            ConflictException: Another restore is running in this process
            RestoreFailedException: A document cannot be parsed or the writes fail
        """
        if not _restore_lock.acquire(blocking=False):
            raise ConflictException("A restore is already in progress")
        try:
            archive = self._open(content)
            metadata = self._read_metadata(archive)
            data = {table.model: self._read_table(archive, table) for table in BACKUP_TABLES}
            self._replace_all(data)
        finally:
            _restore_lock.release()

        logger.info(
            "restore_completed",
            backup_date=metadata.backup_date,
            rows=sum(len(table_rows) for table_rows in data.values()),
        )
        return metadata

    def _open(self, content: bytes) -> zipfile.ZipFile:
        try:
            return zipfile.ZipFile(io.BytesIO(content))
        except zipfile.BadZipFile:
            raise ValidationException("Invalid backup: not a zip archive")
        except UnicodeDecodeError as e:
            raise RestoreFailedException(f"Invalid entry name: {e}") from e

    def _read_entry(self, archive: zipfile.ZipFile, file_name: str) -> bytes:
        """Raw bytes of one archive entry"""
        try:
            return archive.read(file_name)
        except (zipfile.BadZipFile, zlib.error, EOFError) as e:
            raise RestoreFailedException(f"{file_name}: {e}") from e

    def _read_metadata(self, archive: zipfile.ZipFile) -> rows.BackupMetadata:
        if METADATA_FILE not in archive.namelist():
            raise ValidationException("Invalid backup: missing metadata.json")

        try:
            document = json.loads(self._read_entry(archive, METADATA_FILE))
        except ValueError as e:
            raise RestoreFailedException(f"{METADATA_FILE}: {e}") from e
        if not isinstance(document, dict):
            raise RestoreFailedException(f"{METADATA_FILE}: expected a JSON object")

        # Compared before validation so a numeric version is reported as unsupported
        schema_version = document.get("schemaVersion")
        if schema_version != BACKUP_SCHEMA_VERSION:
            raise ValidationException(f"Unsupported schema version: {schema_version}")

        try:
            return rows.BackupMetadata.model_validate(document)
        except ValidationError as e:
            raise RestoreFailedException(f"{METADATA_FILE}: {e}") from e

    def _read_table(self, archive: zipfile.ZipFile, table: BackupTable) -> list[dict]:
        """Rows of one table keyed by attribute name, native types"""
        if table.file_name not in archive.namelist():
            return []

        content = self._read_entry(archive, table.file_name)
        try:
            parsed = TypeAdapter(list[table.row_schema]).validate_json(content)
        except ValidationError as e:
            raise RestoreFailedException(f"{table.file_name}: {e}") from e
        return [row.model_dump() for row in parsed]

    def _replace_all(self, data: dict[type[Base], list[dict]]) -> None:
        try:
            for model in DELETE_ORDER:
                self.repo.delete_all(model)
            for model in INSERT_ORDER:
                if data[model]:
                    self.repo.insert_many(model, data[model])
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.exception("restore_failed")
            raise RestoreFailedException(str(e)) from e
