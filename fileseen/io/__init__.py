"""
Record model and line-oriented I/O.

Exports:
    FileRecord    -> one decoded file observation
    Disposition   -> verdict attached to a file observation

``fileseen.io.decoder`` depends on the validation rules, which depend on this
package, so it is imported by its full path rather than re-exported here.
"""
from .record import Disposition, FileRecord

__all__ = ["FileRecord", "Disposition"]
