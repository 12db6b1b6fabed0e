# src/candy/__init__.py
"""candy: a modal terminal text editor."""

__version__ = "0.1.0"
