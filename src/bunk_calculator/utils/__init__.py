from .numbers import InvalidNumber, format_number, parse_decimal, parse_int

__all__ = ["InvalidNumber", "parse_decimal", "parse_int", "format_number"]
