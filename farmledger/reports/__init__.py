"""Mini README: Aggregation and reporting for the farm ledger.

``aggregation`` holds the pure totals calculations, ``generator`` assembles
structured overall and per-farmer reports, and ``rendering`` turns those
reports into printable HTML.
"""

from .aggregation import (
    FarmerSummary,
    GrandTotals,
    grand_totals,
    per_farmer_summary,
    profit,
    total_expense,
    total_income,
)
from .generator import (
    FarmerNotFound,
    FarmerReport,
    OverallReport,
    build_dashboard,
    build_farmer_report,
    build_overall_report,
)
from .rendering import format_pkr, render_farmer_report, render_overall_report

__all__ = [
    "FarmerNotFound",
    "FarmerReport",
    "FarmerSummary",
    "GrandTotals",
    "OverallReport",
    "build_dashboard",
    "build_farmer_report",
    "build_overall_report",
    "format_pkr",
    "grand_totals",
    "per_farmer_summary",
    "profit",
    "render_farmer_report",
    "render_overall_report",
    "total_expense",
    "total_income",
]
