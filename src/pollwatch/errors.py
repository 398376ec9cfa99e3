"""Exception types for pollwatch."""

from __future__ import annotations


class WatchConfigError(Exception):
    """Fatal problem with the watch configuration.

    Raised at startup when:
    - A watched directory or file does not exist
    - The scan interval is not a positive number
    - The configured driver name is not registered

    No baseline can be established in these cases, so the error is
    allowed to propagate to the caller.
    """

    pass
