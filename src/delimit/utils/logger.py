"""Logger namespacing for delimit.

Every delimit logger lives under the ``delimit`` hierarchy, so one call
enables the scan trace (matched regions, refills, final drain):

    >>> import logging
    >>> logging.getLogger("delimit").setLevel(logging.DEBUG)

The library never installs handlers; configure them in the application.
"""

from __future__ import annotations

import logging

ROOT_LOGGER_NAME = "delimit"


def get_logger(name: str) -> logging.Logger:
    """Return the standard library logger for name, inside the delimit hierarchy.

    Module names already under ``delimit`` are used as-is; anything else is
    nested beneath it.

    Example:
        >>> get_logger("delimit.engine").name
        'delimit.engine'
        >>> get_logger("sinks").name
        'delimit.sinks'
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
