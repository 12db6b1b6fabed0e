# candy/core/errors.py
"""Exception hierarchy for the candy editor.

Fatal environment errors (`TerminalError`, `DocumentLoadError`) propagate out
of the main loop and terminate the process after the terminal is restored.
`NoFileNameError` is recoverable and only ever surfaces as a status message.
"""


class CandyError(Exception):
    """Base class for all editor errors."""


class TerminalError(CandyError):
    """The terminal could not be queried or switched into raw mode."""


class DocumentLoadError(CandyError):
    """The file requested at startup exists but could not be read."""


class NoFileNameError(CandyError):
    """A save was requested for a document with no associated path."""
