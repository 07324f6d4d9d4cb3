from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Callable, Optional

from .builder import Generation, generate
from .formats import DEFAULT_OUTPUT_DIR, FormatChoice, FormatLike, resolve_format

log = logging.getLogger(__name__)


COPY_ACK_SECONDS = 2.0


class FormState(str, Enum):
    EMPTY = "empty"
    READY = "ready"


class CommandForm:
    """The three form inputs plus whatever they currently generate.

    Every setter recomputes the command, so ``command`` and ``error`` always
    reflect the current inputs. ``copy`` hands the command to a clipboard
    writer and raises ``copied`` for ``ack_seconds``; a later copy or
    ``close`` cancels the pending reset.
    """

    def __init__(
        self,
        clipboard: Callable[[str], None],
        *,
        url: str = "",
        format_choice: FormatLike = FormatChoice.BEST,
        output_dir: str = DEFAULT_OUTPUT_DIR,
        ack_seconds: float = COPY_ACK_SECONDS,
    ):
        self._clipboard = clipboard
        self._ack_seconds = ack_seconds
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()
        self.copied = False

        self._url = url
        self._format_choice = resolve_format(format_choice)
        self._output_dir = output_dir
        self._generation = Generation()
        self._recompute()

    @property
    def url(self) -> str:
        return self._url

    @url.setter
    def url(self, value: str) -> None:
        self._url = value
        self._recompute()

    @property
    def format_choice(self) -> FormatChoice:
        return self._format_choice

    @format_choice.setter
    def format_choice(self, value: FormatLike) -> None:
        self._format_choice = resolve_format(value)
        self._recompute()

    @property
    def output_dir(self) -> str:
        return self._output_dir

    @output_dir.setter
    def output_dir(self, value: str) -> None:
        self._output_dir = value
        self._recompute()

    @property
    def output_dir_relevant(self) -> bool:
        return self._format_choice is not FormatChoice.LIST_FORMATS

    @property
    def command(self) -> Optional[str]:
        return self._generation.command

    @property
    def error(self) -> Optional[str]:
        return self._generation.error

    @property
    def state(self) -> FormState:
        return FormState.READY if self._generation.ready else FormState.EMPTY

    def _recompute(self) -> None:
        self._generation = generate(self._url, self._format_choice, self._output_dir)

    def copy(self) -> bool:
        command = self.command
        if not command:
            return False

        self._clipboard(command)
        log.debug("copied command to clipboard")

        with self._lock:
            self._cancel_timer()
            self.copied = True
            timer = threading.Timer(self._ack_seconds, self._clear_copied)
            timer.daemon = True
            self._timer = timer
        timer.start()
        return True

    def _clear_copied(self) -> None:
        with self._lock:
            if self._timer is not threading.current_thread():
                # Superseded by a newer copy.
                return
            self.copied = False
            self._timer = None

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def close(self) -> None:
        with self._lock:
            self._cancel_timer()
            self.copied = False
