"""
Stored file references.

An uploaded file is recorded either as a path relative to the upload
directory or as a full URL to externally hosted content. The stored text is
classified once, when a row is loaded, into ``LocalPath`` or ``RemoteURL``.
"""
from dataclasses import dataclass

from sqlalchemy import Text
from sqlalchemy.types import TypeDecorator

REMOTE_SCHEMES = ("http://", "https://")


@dataclass(frozen=True)
class LocalPath:
    path: str

    @property
    def public_url(self) -> str:
        return f"/uploads/{self.path}"

    def __str__(self) -> str:
        return self.path


@dataclass(frozen=True)
class RemoteURL:
    url: str

    @property
    def public_url(self) -> str:
        return self.url

    def __str__(self) -> str:
        return self.url


FileRef = LocalPath | RemoteURL


def parse_file_ref(value: str | None) -> FileRef | None:
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    if value.lower().startswith(REMOTE_SCHEMES):
        return RemoteURL(value)
    return LocalPath(value)


def public_url(ref: FileRef | None) -> str | None:
    return ref.public_url if ref is not None else None


class FileRefType(TypeDecorator):
    """TEXT column holding a FileRef."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, (LocalPath, RemoteURL)):
            return str(value)
        ref = parse_file_ref(value)
        return str(ref) if ref is not None else None

    def process_result_value(self, value, dialect):
        return parse_file_ref(value)
