"""Error kinds raised by the aggregation run.

Every error here is fatal: the CLI reports the message and aborts the run.
Per-row anomalies (excluded rows, blank rows, out-of-range columns) are not
errors and never raise.
"""

from __future__ import annotations


class ShirtsError(Exception):
    """Base class for fatal run errors."""


class ConfigReadError(ShirtsError):
    """The sheet configuration file is missing or unreadable."""


class ConfigParseError(ShirtsError):
    """The sheet configuration is malformed."""


class ExclusionParseError(ConfigParseError):
    """An ``excludeRows`` spec has a bound that is not an integer."""


class FetchError(ShirtsError):
    """The spreadsheet provider could not return a range."""


class WriteError(ShirtsError):
    """The output stream could not be written."""


class ArgumentError(ShirtsError):
    """No 4-character year token was passed on the command line."""
