from __future__ import annotations
from typing import Protocol


class NotifierPort(Protocol):
    def info(self, message: str) -> None:
        ...

    def alert(self, message: str) -> None:
        """Show a failure and block until the user acknowledges it."""
        ...
