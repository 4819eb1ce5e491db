"""Diagnostic text cleaning and classification."""

from .classifier import should_translate, strip_ansi

__all__ = ["should_translate", "strip_ansi"]
