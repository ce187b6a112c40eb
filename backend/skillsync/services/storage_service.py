import logging
import uuid
from pathlib import Path

from fastapi import HTTPException, UploadFile

from skillsync.config import settings
from skillsync.utils.file_refs import FileRef, LocalPath
from skillsync.utils.filesystem import ensure_data_dirs, resolve_upload_path, sanitize_filename
from skillsync.utils.hashing import sha256_bytes

logger = logging.getLogger(__name__)

RESUME_EXTENSIONS = {"pdf", "doc", "docx"}
IMAGE_EXTENSIONS = {"jpg", "jpeg", "png", "gif"}


def file_extension(filename: str | None) -> str:
    if not filename or "." not in filename:
        return ""
    return filename.rsplit(".", 1)[1].lower()


def check_extension(filename: str | None, allowed: set[str], label: str):
    if file_extension(filename) not in allowed:
        allowed_list = ", ".join(sorted(allowed))
        raise HTTPException(status_code=400, detail=f"{label} must be one of: {allowed_list}")


async def read_upload(file: UploadFile) -> bytes:
    max_bytes = settings.max_upload_bytes
    size = 0
    chunks: list[bytes] = []
    while True:
        chunk = await file.read(1024 * 1024)
        if not chunk:
            break
        size += len(chunk)
        if size > max_bytes:
            logger.warning("Rejected upload %r: larger than %d bytes", file.filename, max_bytes)
            raise HTTPException(status_code=413, detail=f"File too large (max {max_bytes} bytes)")
        chunks.append(chunk)

    content = b"".join(chunks)
    if not content:
        raise HTTPException(status_code=400, detail="Empty file")
    return content


def store_upload(kind: str, filename: str, content: bytes) -> LocalPath:
    """Write an upload under ``upload_dir/<kind>/`` and return its reference."""
    ensure_data_dirs()
    file_hash = sha256_bytes(content)
    # Two uploads never share a path, even with identical content
    stored_name = f"{file_hash[:8]}-{uuid.uuid4().hex[:8]}_{sanitize_filename(filename)}"

    target_dir = settings.upload_dir / kind
    target_dir.mkdir(parents=True, exist_ok=True)
    (target_dir / stored_name).write_bytes(content)
    return LocalPath(f"{kind}/{stored_name}")


async def save_upload(file: UploadFile, kind: str, allowed: set[str], label: str) -> LocalPath:
    check_extension(file.filename, allowed, label)
    content = await read_upload(file)
    return store_upload(kind, file.filename, content)


def local_file_path(ref: FileRef | None) -> Path | None:
    if not isinstance(ref, LocalPath):
        return None
    return resolve_upload_path(ref.path)


def delete_local(ref: FileRef | None):
    """Remove a stored local file. Remote references are left alone."""
    path = local_file_path(ref)
    if path is None:
        return
    try:
        path.unlink(missing_ok=True)
    except OSError:
        logger.exception("Failed to delete stored file %s", path)
