"""Top-level package for cargo-check-i18n.

This package runs `cargo check` and annotates human-readable diagnostic lines
with machine translations. The main orchestration entry point is
`CheckPipeline`.
"""

from .pipeline import CheckPipeline

__all__ = ["CheckPipeline", "__version__"]

__version__ = "0.2.0"
