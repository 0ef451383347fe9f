from __future__ import annotations

import sys
from typing import Sequence, TextIO

from backdrops.host import Picker, Window
from backdrops.models import Choice


class TextPicker:
    """Numbered-list picker on a text stream.

    An empty line, ``q`` or end of input dismisses the picker.
    """

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout

    def choose(self, window: Window, title: str, choices: Sequence[Choice]) -> str | None:
        if not choices:
            return None

        width = len(str(len(choices)))
        self.stdout.write(f"{title}\n")
        for position, choice in enumerate(choices, start=1):
            self.stdout.write(f"  {position:>{width}}) {choice.label}\n")

        while True:
            self.stdout.write("> ")
            self.stdout.flush()
            line = self.stdin.readline()
            if not line:
                return None
            answer = line.strip()
            if answer in {"", "q"}:
                return None
            try:
                position = int(answer)
            except ValueError:
                position = 0
            if 1 <= position <= len(choices):
                return choices[position - 1].id
            self.stdout.write(f"Enter a number between 1 and {len(choices)}.\n")


def make_picker(gui: bool) -> Picker:
    if not gui:
        return TextPicker()
    from backdrops.gui import RaylibPicker

    return RaylibPicker()
