"""Utility functions for ecolage."""

from ecolage.utils.date_parser import parse_date, school_year_for
from ecolage.utils.amount_parser import parse_amount
from ecolage.utils.amount_words import amount_to_words

__all__ = ["parse_date", "school_year_for", "parse_amount", "amount_to_words"]
