"""Inkwell HTTP adapter."""
