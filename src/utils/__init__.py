"""Shared helper modules."""
from src.utils.dates import extract_year, format_date, calculate_age, format_birth_order

__all__ = ["extract_year", "format_date", "calculate_age", "format_birth_order"]
