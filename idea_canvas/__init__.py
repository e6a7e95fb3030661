"""Idea Canvas: structure product ideas into a Lean Canvas and log them to Google Sheets"""

__version__ = "1.0.0"
