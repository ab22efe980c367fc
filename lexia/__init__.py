# lexia/__init__.py
"""Lexia: strategic case analysis and legal document drafting."""

__version__ = "0.1.0"
