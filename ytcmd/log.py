from __future__ import annotations

import logging

import typer

_LEVEL_COLORS = {
    logging.DEBUG: typer.colors.BRIGHT_BLACK,
    logging.WARNING: typer.colors.YELLOW,
    logging.ERROR: typer.colors.RED,
    logging.CRITICAL: typer.colors.RED,
}


class _TyperFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        msg = super().format(record)
        color = _LEVEL_COLORS.get(record.levelno)
        if color is None:
            return msg
        return typer.style(msg, fg=color)


def setup_logging(verbose: bool = False) -> None:
    """Configure the root logger once: a single stderr handler."""
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler()
    handler.setFormatter(_TyperFormatter("%(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)
