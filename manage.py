#!/usr/bin/env python3
"""
Abastech fuel reports management CLI.

Usage:
    python manage.py serve                          Start the API server
    python manage.py export-stock rows.csv          Tank / fuel-truck stock report
    python manage.py export-fuel-detail rows.json   Fuel detail grouped report
    python manage.py export-horimeters data.json    Horimeter/odometer history
    python manage.py daily-stock                    Today's stock per location

Input files are row snapshots of the fuel sheets: CSV (one row per line,
header on the first line) or JSON (a list of rows, or an object with the
request fields).
"""

import argparse
import asyncio
import csv
import json
import sys
from datetime import date
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from src.application.dto.requests import (
    DailyStockRequest,
    ExportFuelDetailRequest,
    ExportHorimeterReportRequest,
    ExportStockReportRequest,
)
from src.application.use_cases import (
    ExportFuelDetailUseCase,
    ExportHorimeterReportUseCase,
    ExportStockReportUseCase,
    GetDailyStockUseCase,
)
from src.application.use_cases.export_common import ExportResult
from src.config import configure_logging, get_logger, get_settings
from src.core.exceptions import FuelReportError

logger = get_logger(__name__)


def _load_payload(path: Path, list_key: str) -> dict[str, Any]:
    """Read a CSV or JSON snapshot into request fields."""
    if not path.exists():
        raise SystemExit(f"Input file not found: {path}")

    if path.suffix.lower() == ".csv":
        with path.open(newline="", encoding="utf-8-sig") as fh:
            return {list_key: list(csv.DictReader(fh))}

    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, list):
        return {list_key: data}
    if isinstance(data, dict):
        return data
    raise SystemExit(f"Unsupported JSON payload in {path}: expected a list or an object")


def _apply_common(payload: dict[str, Any], args: argparse.Namespace) -> dict[str, Any]:
    payload["reference_date"] = args.date or payload.get("reference_date") or date.today()
    payload["format"] = args.format
    if args.organization:
        payload.setdefault("metadata", {})["organization_name"] = args.organization
    return payload


def _period(args: argparse.Namespace, payload: dict[str, Any]) -> None:
    if args.start or args.end:
        payload["period"] = {"start": args.start, "end": args.end}


def _write_result(result: ExportResult, output_dir: Path) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    target = output_dir / result.filename
    target.write_bytes(result.content)
    print(f"Wrote {target} ({result.file_size} bytes)")
    return target


# ------------------------------------------------------------------
# Commands
# ------------------------------------------------------------------


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the API server with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "src.api.main:app",
        host=args.host or settings.api.host,
        port=args.port or settings.api.port,
        reload=args.reload,
    )


def cmd_export_stock(args: argparse.Namespace) -> None:
    payload = _apply_common(_load_payload(args.input, "rows"), args)
    payload["kind"] = args.kind
    if args.sort_by_description:
        payload["sort_by_description"] = True
    if args.previous_stock:
        payload["previous_stock"] = json.loads(args.previous_stock)
    if args.daily_stock:
        daily = DailyStockRequest(today=payload["reference_date"])
        payload["daily_snapshots"] = asyncio.run(GetDailyStockUseCase().execute(daily))

    request = ExportStockReportRequest.model_validate(payload)
    _write_result(ExportStockReportUseCase().execute(request), args.output)


def cmd_export_fuel_detail(args: argparse.Namespace) -> None:
    payload = _apply_common(_load_payload(args.input, "rows"), args)
    payload["group_by"] = args.group_by
    _period(args, payload)
    if args.include_entries:
        payload["include_entries"] = True
    if args.sort_by_description:
        payload["sort_by_description"] = True

    request = ExportFuelDetailRequest.model_validate(payload)
    _write_result(ExportFuelDetailUseCase().execute(request), args.output)


def cmd_export_horimeters(args: argparse.Namespace) -> None:
    payload = _apply_common(_load_payload(args.input, "readings"), args)
    _period(args, payload)
    for name in ("company", "category", "search"):
        value = getattr(args, name)
        if value:
            payload[name] = value

    request = ExportHorimeterReportRequest.model_validate(payload)
    _write_result(ExportHorimeterReportUseCase().execute(request), args.output)


def cmd_daily_stock(args: argparse.Namespace) -> None:
    """Print today's stock row for each configured location."""
    request = DailyStockRequest(today=args.date, locations=args.location or None)
    use_case = GetDailyStockUseCase()
    snapshots = asyncio.run(use_case.execute(request))
    response = use_case.to_response(snapshots, request.today or date.today())
    print(response.model_dump_json(indent=2))


# ------------------------------------------------------------------
# Parser
# ------------------------------------------------------------------


def _add_export_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("input", type=Path, help="CSV or JSON snapshot")
    parser.add_argument(
        "-o", "--output", type=Path, default=Path("."), help="Output directory (default: .)"
    )
    parser.add_argument(
        "--format", choices=["pdf", "xlsx"], default="pdf", help="Artifact format (default: pdf)"
    )
    parser.add_argument(
        "--date", type=date.fromisoformat, help="Reference date YYYY-MM-DD (default: today)"
    )
    parser.add_argument("--organization", help="Organization name for the header band")


def _add_period_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--start", type=date.fromisoformat, help="Period start YYYY-MM-DD")
    parser.add_argument("--end", type=date.fromisoformat, help="Period end YYYY-MM-DD")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Abastech fuel reports CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # serve
    p_serve = sub.add_parser("serve", help="Start the API server")
    p_serve.add_argument("--host", help="Bind host (default: API_HOST)")
    p_serve.add_argument("--port", type=int, help="Bind port (default: API_PORT)")
    p_serve.add_argument("--reload", action="store_true", help="Auto-reload on code changes")
    p_serve.set_defaults(func=cmd_serve)

    # export-stock
    p_stock = sub.add_parser("export-stock", help="Tank / fuel-truck stock report")
    _add_export_arguments(p_stock)
    p_stock.add_argument(
        "--kind", choices=["tanks", "trucks", "combined"], default="combined",
        help="Locations to include (default: combined)",
    )
    p_stock.add_argument(
        "--previous-stock", help='Opening stock as JSON, e.g. \'{"Comboio 01": 1200}\''
    )
    p_stock.add_argument("--sort-by-description", action="store_true")
    p_stock.add_argument(
        "--daily-stock", action="store_true",
        help="Take location baselines from the daily stock sheets of the reference date",
    )
    p_stock.set_defaults(func=cmd_export_stock)

    # export-fuel-detail
    p_detail = sub.add_parser("export-fuel-detail", help="Fuel detail grouped report")
    _add_export_arguments(p_detail)
    _add_period_arguments(p_detail)
    p_detail.add_argument(
        "--group-by", choices=["location", "company", "vehicle"], default="location",
        help="Grouping key (default: location)",
    )
    p_detail.add_argument("--include-entries", action="store_true")
    p_detail.add_argument("--sort-by-description", action="store_true")
    p_detail.set_defaults(func=cmd_export_fuel_detail)

    # export-horimeters
    p_hori = sub.add_parser("export-horimeters", help="Horimeter/odometer history report")
    _add_export_arguments(p_hori)
    _add_period_arguments(p_hori)
    p_hori.add_argument("--company")
    p_hori.add_argument("--category")
    p_hori.add_argument("--search")
    p_hori.set_defaults(func=cmd_export_horimeters)

    # daily-stock
    p_daily = sub.add_parser("daily-stock", help="Today's stock per configured location")
    p_daily.add_argument("--date", type=date.fromisoformat, help="Day to resolve (default: today)")
    p_daily.add_argument(
        "--location", action="append", help="Configured location (repeatable, default: all)"
    )
    p_daily.set_defaults(func=cmd_daily_stock)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(stream=sys.stderr)

    try:
        args.func(args)
    except PydanticValidationError as exc:
        print(f"Invalid input: {exc}", file=sys.stderr)
        return 2
    except FuelReportError as exc:
        logger.error(
            "cli_command_failed", command=args.command, error=exc.code, details=exc.details
        )
        print(f"Error [{exc.code}]: {exc.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
