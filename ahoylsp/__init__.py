"""Symbols, outline, diagnostics, definitions and completion for the Ahoy language."""

__version__ = "0.1.0"