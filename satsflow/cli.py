"""Command-line entrypoint for spreadsheet imports and portfolio summaries."""
from __future__ import annotations

import argparse
from datetime import date
from pathlib import Path
import sys

from satsflow.application.dto import ImportRequest, SummaryRequest
from satsflow.application.use_cases import (
    ImportSpreadsheetUseCase,
    PortfolioSummaryContext,
    PortfolioSummaryUseCase,
)
from satsflow.domain.aggregation import CostBasisAggregator, distribution_by_origin
from satsflow.domain.models import Currency, Period, btc_to_sats
from satsflow.errors import MissingRequiredColumn, SatsflowError
from satsflow.infrastructure.repositories.rate_repositories import StaticRateProvider
from satsflow.infrastructure.repositories.spreadsheet_repositories import SpreadsheetRecordRepository
from satsflow.logging_config import configure_logging
from satsflow.presentation.import_report import rejections_to_rows, render_csv


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import bitcoin aportes from spreadsheets and summarize cost basis")
    parser.add_argument("--log-level", default="WARNING", help="Log level (default: WARNING)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    import_parser = subparsers.add_parser("import", help="Validate a CSV/Excel file of aportes")
    import_parser.add_argument("file", type=str, help="Path to CSV, XLSX or XLS file")
    import_parser.add_argument("--rejections-out", type=str, help="Write rejected rows to this CSV path")

    summary_parser = subparsers.add_parser("summary", help="Aggregate the aportes of a file against a quote")
    summary_parser.add_argument("file", type=str, help="Path to CSV, XLSX or XLS file")
    summary_parser.add_argument("--primary-rate", required=True, help="BTC price in BRL")
    summary_parser.add_argument("--secondary-rate", required=True, help="BTC price in USD")
    summary_parser.add_argument(
        "--currency", default=Currency.BRL.value, choices=[currency.value for currency in Currency]
    )
    summary_parser.add_argument(
        "--period", default=None, choices=[period.value for period in Period], help="Only this period"
    )
    summary_parser.add_argument("--as-of", type=str, help="Reference date (YYYY-MM-DD) for period filters")
    return parser.parse_args(argv)


def run_import(args: argparse.Namespace) -> int:
    path = Path(args.file)
    response = ImportSpreadsheetUseCase().execute(ImportRequest(content=path.read_bytes(), filename=path.name))
    result = response.result

    print("Import Summary")
    print("==============")
    print(f"File: {response.filename} ({response.file_hash[:12]})")
    print(f"Importable rows: {len(result.accepted)}")
    print(f"Rejected rows: {len(result.rejected)}")
    span = result.date_range()
    if span:
        print(f"Period: {span[0].isoformat()} to {span[1].isoformat()}")

    if result.rejected:
        print("\nRejected rows:")
        for item in result.rejected:
            print(f"- row {item.row_index}: {item.kind} ({item.field or '-'}) {item.reason}")
        if args.rejections_out:
            Path(args.rejections_out).write_bytes(render_csv(rejections_to_rows(result.rejected)))
            print(f"\nRejections written to {args.rejections_out}")
    return 0


def run_summary(args: argparse.Namespace) -> int:
    path = Path(args.file)
    repository = SpreadsheetRecordRepository(path)
    context = PortfolioSummaryContext(
        record_repository=repository,
        rate_provider=StaticRateProvider(args.primary_rate, args.secondary_rate),
        aggregator=CostBasisAggregator(),
    )
    periods = (Period(args.period),) if args.period else tuple(Period)
    request = SummaryRequest(
        currency=Currency(args.currency),
        periods=periods,
        now=date.fromisoformat(args.as_of) if args.as_of else None,
    )
    response = PortfolioSummaryUseCase(context).execute(request)

    print(f"Portfolio Summary ({response.currency.value})")
    print("=========================")
    for period, result in response.results.items():
        average = f"{result.weighted_average_rate:.2f}" if result.has_purchases else "no aportes"
        print(f"[{period.value}]")
        print(f"  Total BTC: {result.total_btc} ({btc_to_sats(result.total_btc):.0f} sats)")
        print(f"  Total invested: {result.total_invested:.2f}")
        print(f"  Weighted average rate: {average}")
        print(f"  Current value: {result.current_value:.2f}")
        print(f"  Change: {result.percent_change:.2f}%")

    distribution = distribution_by_origin(repository.list_records())
    if distribution:
        print("\nBTC by origin:")
        for origin, amount in sorted(distribution.items(), key=lambda item: item[0].value):
            print(f"  {origin.value}: {amount}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    configure_logging(args.log_level)
    try:
        if args.command == "import":
            return run_import(args)
        return run_summary(args)
    except MissingRequiredColumn as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    except SatsflowError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
