from __future__ import annotations
import logging
import sys
from typing import Callable, TextIO


logger = logging.getLogger(__name__)

class ConsoleNotifier:
    """Shows export results on the terminal.

        Failures are printed to stderr and, on an interactive terminal, wait
        for Enter so a failed export cannot scroll by unnoticed.
        """

    def __init__(
        self,
        out: TextIO | None = None,
        err: TextIO | None = None,
        require_ack: bool | None = None,
        read_line: Callable[[], str] | None = None,
    ) -> None:
        self._out = out or sys.stdout
        self._err = err or sys.stderr
        self._require_ack = sys.stdin.isatty() if require_ack is None else require_ack
        self._read_line = read_line or sys.stdin.readline

    def info(self, message: str) -> None:
        self._out.write(f"{message}\n")
        self._out.flush()

    def alert(self, message: str) -> None:
        logger.debug("Alerting user: %s", message)
        self._err.write(f"\n[ERRO] {message}\n")
        if self._require_ack:
            self._err.write("Pressione Enter para continuar...")
            self._err.flush()
            self._read_line()
        self._err.flush()
