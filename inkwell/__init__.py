"""Inkwell: content classification and filtering engine for a blog platform."""

__version__ = "0.1.0"
