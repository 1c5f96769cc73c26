from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import Response
from sqlalchemy.orm import Session

from household_hub.database import get_db
from household_hub.dependencies import get_current_user
from household_hub.models.user import User
from household_hub.services.backup_service import BackupService
from household_hub.schemas.backup_schemas import RestoreResponse
from household_hub.core.exceptions import ValidationException

router = APIRouter()


@router.get("/backup", response_class=Response)
async def download_backup(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Download a full database backup.

    Zip archive with metadata.json and one JSON document per table.
    """
    service = BackupService(db)
    filename, content = service.export(user)
    return Response(
        content=content,
        media_type="application/zip",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/restore", response_model=RestoreResponse)
def restore_backup(
    file: UploadFile | None = File(None),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Replace ALL data with the contents of a backup archive.

    - Archive is validated completely before anything is deleted
    - Schema version must be exactly 1.0
    - Runs in one transaction; a failure leaves the data unchanged
    - 409 while another restore is running

    Runs in the worker threadpool; concurrent uploads contend for the restore lock.
    """
    if file is None:
        raise ValidationException("No file uploaded")

    service = BackupService(db)
    metadata = service.restore(file.file.read())

    return {
        "message": "Database restored successfully",
        "metadata": {"backup_date": metadata.backup_date, "counts": metadata.counts},
    }
