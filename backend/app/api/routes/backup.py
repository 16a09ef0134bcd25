"""
Backup and restore routes (admin only).
"""
from datetime import datetime
from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import Response
from app.api.dependencies import get_backup_service, get_current_principal
from app.core.security import Principal
from app.core.utils import format_response
from app.schemas.backup import RestoreResult
from app.schemas.common import DataResponse
from app.services.backup_service import BackupService, backup_filename

router = APIRouter(tags=["backup"])


@router.get("/backup")
def download_backup(
    principal: Principal = Depends(get_current_principal),
    backups: BackupService = Depends(get_backup_service)
):
    """Download every table as a JSON attachment."""
    document = backups.dump(principal)
    return Response(
        content=document.model_dump_json(),
        media_type="application/json",
        headers={"Content-Disposition": f"attachment; filename={backup_filename(datetime.now())}"},
    )


@router.post("/restore", response_model=DataResponse[RestoreResult])
def restore_backup(
    backup_file: UploadFile = File(...),
    principal: Principal = Depends(get_current_principal),
    backups: BackupService = Depends(get_backup_service)
):
    """Replace database contents with an uploaded backup."""
    raw = backup_file.file.read()
    restored = backups.restore(principal, raw)
    return format_response(RestoreResult(restored=restored), "Backup restored successfully")
