"""Mini README: Core package initializer for the Farm Ledger bookkeeping tool.

Subpackages:
    * ledger - data model, persistence stores and the CRUD repository.
    * reports - aggregation, report assembly and printable HTML.
    * interface - FastAPI application factory.

Only the logging helper is re-exported here so importing the bookkeeping
core does not pull in the web stack.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
