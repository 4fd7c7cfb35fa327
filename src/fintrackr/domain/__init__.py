"""Domain layer for fintrackr application.

Services are resolved lazily: the database layer imports
``fintrackr.domain.entities`` while the services import the database
layer, so eager imports here would be circular.
"""

_SERVICES = {
    "TransactionService": "fintrackr.domain.transaction",
    "BudgetService": "fintrackr.domain.budget",
    "CSVImportService": "fintrackr.domain.csv_import",
    "AuthService": "fintrackr.domain.auth",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
