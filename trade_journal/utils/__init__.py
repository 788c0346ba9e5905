"""Utility modules for common operations."""

from trade_journal.utils.query_params import parse_closed_param

__all__ = [
    "parse_closed_param",
]
