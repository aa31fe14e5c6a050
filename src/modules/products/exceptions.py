"""Product domain exceptions.

Raised by the Service Layer for conditions the request handler does not
expect in normal operation. Duplicate names or codes are *not* exceptions:
the handler probes for them up front and reports a result instead.
"""

from __future__ import annotations


class ProductNotFound(Exception):
    """The requested product does not exist or has been deleted."""


class InvalidLookupField(ValueError):
    """An existence probe named a field other than ``Name`` or ``Code``."""
