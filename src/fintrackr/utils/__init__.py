"""Utility functions for fintrackr."""

from fintrackr.utils.date_parser import parse_datetime, parse_datetime_or_now, month_bounds
from fintrackr.utils.amount_parser import parse_amount

__all__ = ["parse_datetime", "parse_datetime_or_now", "month_bounds", "parse_amount"]
