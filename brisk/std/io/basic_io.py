import sys
from typing import Optional, TextIO


class BasicIO:
    """Text output used by the printing builtins.

    Writes go to ``stream`` when one was given, otherwise to whatever
    ``sys.stdout`` is at the time of the write, so that redirected or
    captured stdout is honoured.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    @property
    def target(self) -> TextIO:
        return self.stream if self.stream is not None else sys.stdout

    def write(self, text: str) -> None:
        self.target.write(text)
        self.target.flush()

    def write_line(self, text: str) -> None:
        self.write(text + '\n')
