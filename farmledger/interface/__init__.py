"""Mini README: Interactive interfaces (web/CLI) for Farm Ledger.

Exports the FastAPI application factory that serves the bookkeeping API and
printable reports. The Typer CLI in ``main_ledger_centre.py`` launches it.
"""

from .web_app import create_application

__all__ = ["create_application"]
