"""API routers."""

from fintrackr.api.routes import auth, budgets, transactions

__all__ = ["auth", "budgets", "transactions"]
