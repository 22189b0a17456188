"""
Exceptions raised by the journal.
"""


class CSVImportError(ValueError):
    """A broker CSV export could not be turned into trades."""
