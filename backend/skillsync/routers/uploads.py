from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

from skillsync.utils.filesystem import resolve_upload_path

router = APIRouter(prefix="/uploads", tags=["uploads"])


@router.get("/{file_path:path}")
async def download_upload(file_path: str):
    full_path = resolve_upload_path(file_path)
    if full_path is None or not full_path.is_file():
        raise HTTPException(status_code=404, detail="File not found")
    return FileResponse(path=str(full_path))
