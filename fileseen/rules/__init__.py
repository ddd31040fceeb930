"""
Line and field validation rules.

Exports:
    validate_line    -> True if a JSON line is an acceptable file record
    check_line       -> same walk, returning a LineVerdict with the rejection reason
    split_file_name  -> (stem, ext) of a valid ``head.tail`` filename
"""
from .filename import is_valid_file_name, split_file_name
from .line_validator import LineVerdict, check_line, validate_line

__all__ = ["validate_line", "check_line", "LineVerdict", "split_file_name", "is_valid_file_name"]
