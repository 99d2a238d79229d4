"""Shared helpers for spreadsheet ingestion."""
from __future__ import annotations

from io import BytesIO
from pathlib import Path
import hashlib


def ensure_bytes(source: BytesIO | Path | bytes) -> bytes:
    if isinstance(source, bytes):
        return source
    if isinstance(source, BytesIO):
        return source.getvalue()
    if isinstance(source, Path):
        return source.read_bytes()
    raise TypeError(f"Unsupported source type: {type(source)!r}")


def compute_file_hash(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def file_extension(filename: str) -> str:
    return Path(filename).suffix.lower()
