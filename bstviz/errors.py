"""
Exception types for bstviz.

The algorithm core never raises for data conditions (missing values,
empty trees, out-of-range select indices); those become ordinary
not-found steps.  These exceptions belong to the layers around it:
input parsing and export.
"""


class BSTVizError(Exception):
    """Base class for every error raised by bstviz."""


class InputError(BSTVizError, ValueError):
    """A user-supplied value is not a usable BST key (type or range)."""


class ExportError(BSTVizError):
    """Rendering or writing an export file failed."""
