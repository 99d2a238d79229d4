"""Report generators for import results."""
from __future__ import annotations

import csv
import html
import io
from typing import Sequence

from satsflow.domain.models import InvestmentRecord, RowError
from satsflow.domain.results import IngestionResult


def rejections_to_rows(rejected: Sequence[RowError]) -> list[dict[str, str]]:
    return [
        {
            "row_index": str(item.row_index),
            "kind": item.kind,
            "field": item.field or "",
            "reason": item.reason,
        }
        for item in rejected
    ]


def records_to_rows(records: Sequence[InvestmentRecord]) -> list[dict[str, str]]:
    rows: list[dict[str, str]] = []
    for record in records:
        rows.append(
            {
                "date": record.date.isoformat(),
                "amount_invested": str(record.amount_invested),
                "btc_amount": str(record.btc_amount),
                "exchange_rate": str(record.exchange_rate),
                "currency": record.currency.value,
                "origin": record.origin.value,
                "registration_source": record.registration_source.value,
                "note": record.note or "",
            }
        )
    return rows


def render_csv(rows: Sequence[dict[str, str]]) -> bytes:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=list(rows[0].keys()) if rows else [])
    if rows:
        writer.writeheader()
        writer.writerows(rows)
    return buffer.getvalue().encode("utf-8")


def render_html(result: IngestionResult) -> str:
    rows = rejections_to_rows(result.rejected)
    if not rows:
        return f"<p>{len(result.accepted)} rows ready to import; no rejected rows.</p>"
    header = "".join(f"<th>{col}</th>" for col in rows[0].keys())
    body_parts = []
    for row in rows:
        body_parts.append("<tr>" + "".join(f"<td>{html.escape(value)}</td>" for value in row.values()) + "</tr>")
    body_html = "".join(body_parts)
    return f"<table><thead><tr>{header}</tr></thead><tbody>{body_html}</tbody></table>"
