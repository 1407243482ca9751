"""
Core business logic services.

Layer-pure services that depend only on:
- src/core/entities/*
- src/core/interfaces/*
- src/core/exceptions.py

NO infrastructure imports. Locale and location configuration are passed in
by the caller.
"""

from src.core.services.collation import collation_key, fold_text
from src.core.services.field_resolver import (
    FIELD_CANDIDATES,
    STOCK_FIELD_CANDIDATES,
    resolve_field,
    resolve_text,
)
from src.core.services.number_format import (
    format_filename_date,
    format_locale_number,
    format_report_date,
    format_short_date,
    parse_locale_number,
    parse_sheet_date,
)
from src.core.services.pagination import SECTION_BREAK_THRESHOLD_MM, needs_page_break
from src.core.services.record_classifier import (
    classify_destination,
    classify_location,
    classify_movement,
    location_key,
)
from src.core.services.row_normalizer import normalize_movement, normalize_movements
from src.core.services.stock_aggregator import (
    compute_stock_summary,
    group_rows_by_location,
    resolve_daily_stock,
    rollup_summaries,
    snapshot_to_summary,
    summarize_locations,
)
from src.core.services.table_builder import (
    build_entries_table,
    build_fuel_detail_table,
    build_movement_table,
    build_stock_summary_table,
    build_usage_table,
    compute_row_metrics,
    project_detail_record,
    project_record,
    project_usage,
    sort_records,
)
from src.core.services.usage_aggregator import aggregate_usage, filter_usage, is_equipment

__all__ = [
    # Numeric normalizer
    "parse_locale_number",
    "format_locale_number",
    "parse_sheet_date",
    "format_short_date",
    "format_filename_date",
    "format_report_date",
    # Field resolution
    "FIELD_CANDIDATES",
    "STOCK_FIELD_CANDIDATES",
    "resolve_field",
    "resolve_text",
    "normalize_movement",
    "normalize_movements",
    # Classifier
    "classify_location",
    "classify_movement",
    "classify_destination",
    "location_key",
    # Stock aggregator
    "compute_stock_summary",
    "rollup_summaries",
    "group_rows_by_location",
    "summarize_locations",
    "resolve_daily_stock",
    "snapshot_to_summary",
    # Usage aggregator
    "aggregate_usage",
    "filter_usage",
    "is_equipment",
    # Table builder
    "sort_records",
    "compute_row_metrics",
    "build_fuel_detail_table",
    "build_movement_table",
    "build_entries_table",
    "build_stock_summary_table",
    "build_usage_table",
    "project_record",
    "project_detail_record",
    "project_usage",
    # Layout
    "needs_page_break",
    "SECTION_BREAK_THRESHOLD_MM",
    # Text
    "fold_text",
    "collation_key",
]
