# src/candy/core/__init__.py
"""Public facade for candy.core: re-export main classes from CamelCase modules.

Keeps Java-like file names (Document.py, CursorViewport.py, ...),
but provides flat imports for convenience and stability.
"""

# Re-export classes/symbols from CamelCase modules
from .Candy import Candy  # noqa: F401
from .CommandInterpreter import CommandInterpreter  # noqa: F401
from .CursorViewport import CursorViewport  # noqa: F401
from .Document import Document  # noqa: F401
from .ModeController import Mode, ModeController  # noqa: F401
from .StatusMessage import StatusMessage  # noqa: F401


__all__ = [
    "Candy",
    "CommandInterpreter",
    "CursorViewport",
    "Document",
    "Mode",
    "ModeController",
    "StatusMessage",
]
