"""Mini README: Printable HTML documents for ledger reports.

Structure:
    * format_amount - thousands-grouped number without a currency prefix.
    * format_pkr - currency formatting used across reports and dashboards.
    * render_overall_report / render_farmer_report - Jinja2 renderers.

Templates live in ``templates/`` beside this module and use a monospace,
ruled "notebook" style that prints cleanly. Rendering is a pure function of
the report data; opening a print window is left to the browser.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from jinja2 import Environment, PackageLoader, select_autoescape

from .generator import FarmerNotFound, FarmerReportResult, OverallReport

DEFAULT_CURRENCY_PREFIX = "₨ "


def format_amount(value: Optional[float]) -> str:
    """Group thousands and keep at most three fractional digits."""

    number = float(value or 0)
    if number.is_integer():
        return f"{int(number):,}"
    return f"{number:,.3f}".rstrip("0").rstrip(".")


def format_pkr(value: Optional[float], prefix: str = DEFAULT_CURRENCY_PREFIX) -> str:
    return f"{prefix}{format_amount(value)}"


@lru_cache()
def _environment(currency_prefix: str) -> Environment:
    environment = Environment(
        loader=PackageLoader("farmledger.reports", "templates"),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    environment.filters["amount"] = format_amount
    environment.filters["pkr"] = lambda value: format_pkr(value, currency_prefix)
    return environment


def render_overall_report(
    report: OverallReport, *, currency_prefix: str = DEFAULT_CURRENCY_PREFIX
) -> str:
    template = _environment(currency_prefix).get_template("overall_report.html")
    return template.render(report=report)


def render_farmer_report(
    report: FarmerReportResult, *, currency_prefix: str = DEFAULT_CURRENCY_PREFIX
) -> str:
    """Render a farmer report, or a not-found notice for unknown farmers."""

    environment = _environment(currency_prefix)
    if isinstance(report, FarmerNotFound):
        return environment.get_template("not_found.html").render(result=report)
    return environment.get_template("farmer_report.html").render(report=report)
