from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .formats import DEFAULT_OUTPUT_DIR, FormatChoice, FormatLike, resolve_format, spec_for

log = logging.getLogger(__name__)


TOOL = "yt-dlp"
FILENAME_TEMPLATE = "%(title)s.%(ext)s"
EMPTY_URL_MESSAGE = "Please enter a valid URL."


class EmptyURLError(ValueError):
    """The URL was empty once surrounding whitespace was removed."""

    def __init__(self, message: str = EMPTY_URL_MESSAGE):
        self.message = message
        super().__init__(message)


@dataclass(frozen=True)
class Generation:
    command: Optional[str] = None
    error: Optional[str] = None

    @property
    def ready(self) -> bool:
        return self.command is not None


def _quote(value: str) -> str:
    # Plain double quotes only; embedded quote characters are passed through as-is.
    return f'"{value}"'


def build_command(
    url: str,
    format_choice: Optional[FormatLike] = FormatChoice.BEST,
    output_dir: str = DEFAULT_OUTPUT_DIR,
) -> str:
    """Build a single-line yt-dlp invocation.

    Shape: ``yt-dlp [flags] -o "<dir>%(title)s.%(ext)s" [post-process] "<url>"``,
    or ``yt-dlp -F "<url>"`` when listing formats. Raises EmptyURLError when
    ``url`` is blank.
    """
    url = (url or "").strip()
    if not url:
        raise EmptyURLError()

    choice = resolve_format(format_choice)
    if choice is FormatChoice.LIST_FORMATS:
        return f"{TOOL} -F {_quote(url)}"

    spec = spec_for(choice)
    parts = [TOOL]
    if spec.flags:
        parts.append(spec.flags)
    parts += ["-o", _quote(f"{output_dir or ''}{FILENAME_TEMPLATE}")]
    if spec.post_process:
        parts.append(spec.post_process)
    parts.append(_quote(url))
    return " ".join(parts)


def generate(
    url: str,
    format_choice: Optional[FormatLike] = FormatChoice.BEST,
    output_dir: str = DEFAULT_OUTPUT_DIR,
) -> Generation:
    """Like build_command, but reports an empty URL as an error state instead of raising."""
    try:
        command = build_command(url, format_choice, output_dir)
    except EmptyURLError as e:
        log.debug("no command generated: %s", e.message)
        return Generation(error=e.message)
    log.debug("generated command: %s", command)
    return Generation(command=command)
