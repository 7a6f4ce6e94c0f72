"""
User-facing messages and yes/no prompts.

Controllers only depend on the DialogService protocol. ConsoleDialogService
implements it for management commands; a GUI front-end supplies its own.
"""
import sys
from typing import Callable, Optional, Protocol, TextIO

from asgiref.sync import sync_to_async


class DialogService(Protocol):
    async def show_message(self, title: str, message: str) -> None: ...

    async def confirm(self, title: str, message: str) -> bool: ...


class ConsoleDialogService:
    """
    Dialogs on a terminal.

    Messages go to `stdout`; confirmations read a y/n answer with `input_func`.
    With assume_yes=True every confirmation is accepted without asking.
    """
    YES_ANSWERS = ('y', 'yes')

    def __init__(
        self,
        stdout: Optional[TextIO] = None,
        input_func: Optional[Callable[[str], str]] = None,
        assume_yes: bool = False,
    ):
        self.stdout = stdout or sys.stdout
        self.input_func = input_func or input
        self.assume_yes = assume_yes

    async def show_message(self, title: str, message: str) -> None:
        self.stdout.write(f"{title}: {message}\n")

    async def confirm(self, title: str, message: str) -> bool:
        if self.assume_yes:
            return True
        answer = await sync_to_async(self.input_func, thread_sensitive=False)(
            f"{title}: {message} [y/N] "
        )
        return answer.strip().lower() in self.YES_ANSWERS
