"""Run logging for cargo-check-i18n."""

from .logger import RunLogger

__all__ = ["RunLogger"]
