"""Logging utility for geocoord"""

__all__ = ['LOGGER', 'warn_once']

import logging

LOGGER = logging.getLogger('geocoord')
LOGGER.setLevel(logging.WARNING)
_LOG_HANDLER = logging.StreamHandler()
_LOG_HANDLER.setFormatter(logging.Formatter('[%(levelname)s] %(name)s: %(message)s'))
LOGGER.addHandler(_LOG_HANDLER)

_SEEN_WARNINGS = set()


def warn_once(warning: str):
    """Logs a warning, unless the same message was already logged by this process"""
    if warning in _SEEN_WARNINGS:
        return

    _SEEN_WARNINGS.add(warning)
    LOGGER.warning(warning)
