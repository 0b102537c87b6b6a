"""
Playbook Errors
---------------
Exception hierarchy for the few failures that are not handled by degrading
to an empty result.
"""


class PlaybookError(Exception):
    """Base class for all playbook errors."""


class InvalidSettingsError(PlaybookError, ValueError):
    """An RSI setting is outside its allowed range."""


class InsufficientDataError(PlaybookError):
    """Not enough bars to derive the requested structure."""


class DataFormatError(PlaybookError, ValueError):
    """Input bar data could not be parsed."""
