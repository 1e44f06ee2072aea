"""molstat — N50/L50 statistics for linked-read molecule tables."""

__version__ = "0.1.0"
