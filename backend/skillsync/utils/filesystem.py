from pathlib import Path
from skillsync.config import settings

UPLOAD_KINDS = ("avatars", "resumes", "logos")


def ensure_data_dirs(data_dir: Path | None = None) -> Path:
    path = data_dir or settings.data_dir
    path.mkdir(parents=True, exist_ok=True)
    uploads = path / "uploads"
    uploads.mkdir(exist_ok=True)
    for kind in UPLOAD_KINDS:
        (uploads / kind).mkdir(exist_ok=True)
    return path


def resolve_upload_path(relative: str, upload_dir: Path | None = None) -> Path | None:
    """Map a stored relative path to a file inside the upload directory.

    Returns None when the path escapes the upload directory.
    """
    root = (upload_dir or settings.upload_dir).resolve()
    candidate = (root / relative).resolve()
    if candidate != root and root not in candidate.parents:
        return None
    return candidate


def sanitize_filename(name: str) -> str:
    keep = set("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789._-")
    return "".join(c if c in keep else "_" for c in name)
