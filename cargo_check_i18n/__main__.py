"""Module entrypoint for running cargo-check-i18n as ``python -m cargo_check_i18n``."""

from __future__ import annotations

from cargo_check_i18n.cli import main


if __name__ == "__main__":
    main()
