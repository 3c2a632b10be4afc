"""Utility functions for forexledger."""

from forexledger.utils.date_parser import parse_date
from forexledger.utils.amount_parser import parse_amount, parse_twd_amount
from forexledger.utils.money import fits_foreign_scale, round_twd, to_twd

__all__ = ["parse_date", "parse_amount", "parse_twd_amount", "round_twd", "to_twd", "fits_foreign_scale"]
