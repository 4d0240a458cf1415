"""
Построчное чтение пользовательского ввода.

InputReader создаётся один раз при старте и живёт столько же, сколько
соединение с БД. Конец ввода сигнализируется EOFError, как у input().
"""

import sys
from datetime import date
from typing import TextIO

from expense_tracker.core.validators import parse_amount, parse_date
from expense_tracker.domain.domain import ParseError


class InputReader:
    def __init__(self, stream: TextIO | None = None, output: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdin
        self._output = output if output is not None else sys.stdout

    def read_line(self, prompt: str = "") -> str:
        """
        Вывести приглашение и прочитать одну строку без пробелов по краям.

        Raises
        ------
        EOFError
            Если ввод закончился.
        """
        if prompt:
            self._output.write(prompt)
            self._output.flush()
        line = self._stream.readline()
        if not line:
            raise EOFError("end of input")
        return line.strip()

    def read_int(self, prompt: str = "") -> int | ParseError:
        return parse_amount(self.read_line(prompt))

    def read_date(self, prompt: str = "") -> date | ParseError:
        return parse_date(self.read_line(prompt))
