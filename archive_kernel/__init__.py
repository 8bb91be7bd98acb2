"""
Archive Kernel - shared infrastructure for the record conversion engine.

Structured logging, the typed exception hierarchy, the injectable clock and
the diagnostics sink. Nothing here knows about individual record kinds.
"""

__version__ = "0.1.0"
