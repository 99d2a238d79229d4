"""CSV/Excel reader producing the header list and raw rows ingestion expects.

Every cell is read as text so that locale formatting survives until the
field normalizers see it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from io import BytesIO, StringIO
from pathlib import Path
from typing import Sequence
import zipfile

import pandas as pd
import xlrd

from satsflow.config import SETTINGS
from satsflow.domain.models import RawRow
from satsflow.errors import SpreadsheetReadError
from satsflow.logging_config import get_logger

from .utils import ensure_bytes, file_extension

logger = get_logger(__name__)

CSV_ENCODINGS = ("utf-8-sig", "latin-1")
EXCEL_ENGINES = {".xlsx": "openpyxl", ".xls": "xlrd"}


@dataclass(frozen=True)
class RawTable:
    headers: Sequence[str] = field(default_factory=tuple)
    rows: Sequence[RawRow] = field(default_factory=tuple)


def _decode(data: bytes) -> str:
    for encoding in CSV_ENCODINGS:
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    raise SpreadsheetReadError("Could not decode CSV file")


def detect_delimiter(sample: str) -> str:
    header = sample.splitlines()[0] if sample else ""
    return ";" if header.count(";") > header.count(",") else ","


def read_csv_frame(data: bytes) -> pd.DataFrame:
    text = _decode(data)
    return pd.read_csv(
        StringIO(text),
        sep=detect_delimiter(text),
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
    )


def read_excel_frame(data: bytes, extension: str) -> pd.DataFrame:
    return pd.read_excel(
        BytesIO(data),
        sheet_name=0,
        engine=EXCEL_ENGINES[extension],
        dtype=str,
        keep_default_na=False,
    )


def frame_to_table(df: pd.DataFrame) -> RawTable:
    headers = [str(column).strip() for column in df.columns]
    work = df.copy()
    work.columns = headers
    work = work.fillna("")
    rows: list[dict[str, object]] = []
    for _, series in work.iterrows():
        row = {header: series[header] for header in headers}
        if all(str(value).strip() == "" for value in row.values()):
            continue
        rows.append(row)
    return RawTable(headers=tuple(headers), rows=tuple(rows))


def read_spreadsheet(source: BytesIO | Path | bytes, filename: str | None = None) -> RawTable:
    if filename is None and isinstance(source, Path):
        filename = source.name
    if not filename:
        raise SpreadsheetReadError("A filename is required to detect the file format")
    extension = file_extension(filename)
    if extension not in SETTINGS.allowed_extensions:
        raise SpreadsheetReadError(
            f"Unsupported file format {extension or '(none)'}; expected one of {', '.join(SETTINGS.allowed_extensions)}"
        )

    data = ensure_bytes(source)
    if len(data) > SETTINGS.max_upload_bytes:
        raise SpreadsheetReadError(
            f"File too large: {len(data)} bytes (limit {SETTINGS.max_upload_bytes})"
        )
    if not data.strip():
        raise SpreadsheetReadError("File is empty")

    try:
        if extension == ".csv":
            frame = read_csv_frame(data)
        else:
            frame = read_excel_frame(data, extension)
    except SpreadsheetReadError:
        raise
    except (
        ValueError,
        pd.errors.ParserError,
        pd.errors.EmptyDataError,
        zipfile.BadZipFile,
        xlrd.XLRDError,
    ) as exc:
        raise SpreadsheetReadError(f"Could not read {filename}: {exc}") from exc

    table = frame_to_table(frame)
    logger.info("spreadsheet_read", extension=extension, columns=len(table.headers), rows=len(table.rows))
    return table
