"""Mini README: FastAPI-powered bookkeeping service for Farm Ledger.

Structure:
    * create_application - application factory wiring routes to a repository.

The interface exposes farmer, income and expense management, JSON report
data, and printable HTML reports. Writes accept form fields, mirroring the
browser forms that drive the service. Unknown identifiers surface as 404
responses and malformed dates as 400 responses.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import FastAPI, Form, HTTPException
from fastapi.responses import HTMLResponse, JSONResponse

from ..configuration import get_settings
from ..ledger import Expense, LedgerRepository, build_store
from ..logging_utils import configure_root_logger, get_logger
from ..reports import (
    FarmerNotFound,
    build_dashboard,
    build_farmer_report,
    build_overall_report,
    per_farmer_summary,
    render_farmer_report,
    render_overall_report,
)

LOGGER = get_logger(__name__)


def create_application(repository: Optional[LedgerRepository] = None) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    app = FastAPI(title="Farm Ledger", version="0.1.0")
    settings = get_settings()
    configure_root_logger(settings.log_level)
    ledger = repository or LedgerRepository(build_store(settings))
    currency_prefix = settings.currency_prefix

    @app.get("/dashboard")
    def dashboard() -> JSONResponse:
        """Return headline totals and the per-farmer profit chart."""

        payload = build_dashboard(ledger.get_document())
        LOGGER.debug(
            "Dashboard -> farmers: %s income: %.2f expense: %.2f",
            payload["farmer_count"],
            payload["total_income"],
            payload["total_expense"],
        )
        return JSONResponse(payload)

    @app.get("/farmers")
    def list_farmers(q: str = "") -> JSONResponse:
        """List farmers with their totals, optionally filtered by name or crop."""

        matches = {farmer.farmer_id for farmer in ledger.search_farmers(q)}
        summaries = [
            summary.as_dict()
            for summary in per_farmer_summary(ledger.get_document())
            if summary.farmer_id in matches
        ]
        return JSONResponse({"farmers": summaries})

    @app.post("/farmers", status_code=201)
    def add_farmer(
        name: str = Form(""),
        crop: str = Form(""),
        area: str = Form(""),
    ) -> JSONResponse:
        farmer_id = ledger.add_farmer(name, crop, area)
        return JSONResponse({"id": farmer_id}, status_code=201)

    @app.get("/farmers/{farmer_id}")
    def get_farmer(farmer_id: int) -> JSONResponse:
        """Return a farmer with incomes and linked expenses."""

        farmer = ledger.get_farmer(farmer_id)
        if farmer is None:
            raise HTTPException(status_code=404, detail=f"Farmer {farmer_id} not found")
        payload = farmer.as_dict()
        payload["expenses"] = [
            expense.as_dict() for expense in ledger.get_expenses_for_farmer(farmer_id)
        ]
        return JSONResponse(payload)

    @app.post("/farmers/{farmer_id}")
    def update_farmer(
        farmer_id: int,
        name: Optional[str] = Form(None),
        crop: Optional[str] = Form(None),
        area: Optional[str] = Form(None),
    ) -> JSONResponse:
        """Patch the provided farmer fields, leaving the rest untouched."""

        updated = ledger.update_farmer(farmer_id, {"name": name, "crop": crop, "area": area})
        if not updated:
            raise HTTPException(status_code=404, detail=f"Farmer {farmer_id} not found")
        return JSONResponse(ledger.get_farmer(farmer_id).as_dict())

    @app.delete("/farmers/{farmer_id}")
    def delete_farmer(farmer_id: int) -> JSONResponse:
        if not ledger.delete_farmer(farmer_id):
            raise HTTPException(status_code=404, detail=f"Farmer {farmer_id} not found")
        return JSONResponse({"deleted": farmer_id})

    @app.post("/farmers/{farmer_id}/incomes", status_code=201)
    def add_income(
        farmer_id: int,
        amount: Optional[str] = Form(None),
        note: str = Form(""),
        date: Optional[str] = Form(None),
    ) -> JSONResponse:
        try:
            income_id = ledger.add_income(farmer_id, amount, note=note, occurred_on=date)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        if income_id is None:
            raise HTTPException(status_code=404, detail=f"Farmer {farmer_id} not found")
        return JSONResponse({"id": income_id, "farmer_id": farmer_id}, status_code=201)

    @app.delete("/farmers/{farmer_id}/incomes/{income_id}")
    def delete_income(farmer_id: int, income_id: int) -> JSONResponse:
        if not ledger.delete_income(farmer_id, income_id):
            raise HTTPException(
                status_code=404, detail=f"Income {income_id} of farmer {farmer_id} not found"
            )
        return JSONResponse({"deleted": income_id, "farmer_id": farmer_id})

    @app.get("/expenses")
    def list_expenses(farmer_id: Optional[int] = None) -> JSONResponse:
        expenses: List[Expense] = (
            ledger.list_expenses() if farmer_id is None else ledger.get_expenses_for_farmer(farmer_id)
        )
        return JSONResponse({"expenses": [expense.as_dict() for expense in expenses]})

    @app.post("/expenses", status_code=201)
    def add_expense(
        farmer_id: int = Form(...),
        amount: Optional[str] = Form(None),
        category: str = Form(""),
        note: str = Form(""),
        date: Optional[str] = Form(None),
    ) -> JSONResponse:
        try:
            expense_id = ledger.add_expense(
                farmer_id, amount, category=category, note=note, occurred_on=date
            )
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse({"id": expense_id, "farmer_id": farmer_id}, status_code=201)

    @app.delete("/expenses/{expense_id}")
    def delete_expense(expense_id: int) -> JSONResponse:
        if not ledger.delete_expense(expense_id):
            raise HTTPException(status_code=404, detail=f"Expense {expense_id} not found")
        return JSONResponse({"deleted": expense_id})

    @app.get("/reports/overall")
    def overall_report() -> JSONResponse:
        report = build_overall_report(ledger.get_document())
        return JSONResponse(report.as_dict())

    @app.get("/reports/overall/print", response_class=HTMLResponse)
    def overall_report_print() -> HTMLResponse:
        report = build_overall_report(ledger.get_document())
        LOGGER.info("Rendering printable overall report with %s rows", len(report.rows))
        return HTMLResponse(render_overall_report(report, currency_prefix=currency_prefix))

    @app.get("/reports/farmers/{farmer_id}")
    def farmer_report(farmer_id: int) -> JSONResponse:
        result = build_farmer_report(ledger.get_document(), farmer_id)
        if isinstance(result, FarmerNotFound):
            raise HTTPException(status_code=404, detail=result.message)
        return JSONResponse(result.as_dict())

    @app.get("/reports/farmers/{farmer_id}/print", response_class=HTMLResponse)
    def farmer_report_print(farmer_id: int) -> HTMLResponse:
        """Render the printable farmer report or a not-found notice."""

        result = build_farmer_report(ledger.get_document(), farmer_id)
        status_code = 404 if isinstance(result, FarmerNotFound) else 200
        return HTMLResponse(
            render_farmer_report(result, currency_prefix=currency_prefix),
            status_code=status_code,
        )

    @app.post("/settings/reset")
    def reset_ledger() -> JSONResponse:
        """Discard recorded data and restore the seed ledger."""

        document = ledger.reset()
        LOGGER.warning("Ledger reset requested through the web interface")
        return JSONResponse(document.as_dict())

    return app
