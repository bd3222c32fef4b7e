"""
Blocking, re-prompting readers for interactive input.

Each reader loops on its own input stream until the text satisfies the
reader's constraint. Bad input is never raised to the caller; the user is
told what was wrong and asked again. End of input raises EOFError.
"""

from __future__ import annotations

import re
import sys
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional, TextIO

from poise_pms.schemas import PersonCreate

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class InputReader:
    """Reads validated values from one input stream, writing prompts to one output stream."""

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self._in = stdin or sys.stdin
        self._out = stdout or sys.stdout

    @property
    def out(self) -> TextIO:
        return self._out

    def say(self, message: str = "") -> None:
        print(message, file=self._out)

    def _prompt(self, prompt: str) -> str:
        self._out.write(f"{prompt}: ")
        self._out.flush()
        line = self._in.readline()
        if not line:
            raise EOFError("input stream closed")
        return line.rstrip("\r\n")

    def read_string(self, prompt: str, allow_blank: bool = False) -> str:
        while True:
            value = self._prompt(prompt).strip()
            if value or allow_blank:
                return value
            self.say("Input cannot be blank. Please try again.")

    def read_int(self, prompt: str) -> int:
        while True:
            value = self._prompt(prompt).strip()
            try:
                return int(value)
            except ValueError:
                self.say("Invalid input. Please enter a whole number.")

    def read_decimal(
        self,
        prompt: str,
        minimum: Optional[Decimal] = None,
        allow_blank: bool = False,
    ) -> Optional[Decimal]:
        while True:
            value = self._prompt(prompt).strip()
            if not value and allow_blank:
                return None
            try:
                number = Decimal(value)
            except InvalidOperation:
                number = None
            if number is None or not number.is_finite():
                self.say("Invalid input. Please enter a valid number (e.g., 150000.00).")
                continue
            if minimum is not None and number < minimum:
                self.say(f"Value cannot be less than {minimum}. Please try again.")
                continue
            return number

    def read_date(self, prompt: str, allow_blank: bool = False) -> Optional[date]:
        """Read a YYYY-MM-DD date. With ``allow_blank`` an empty line returns None."""
        hint = "YYYY-MM-DD, blank to skip" if allow_blank else "YYYY-MM-DD"
        while True:
            value = self._prompt(f"{prompt} ({hint})").strip()
            if not value and allow_blank:
                return None
            if _ISO_DATE.match(value):
                try:
                    return date.fromisoformat(value)
                except ValueError:
                    pass
            self.say("Invalid date. Please use a real calendar date in YYYY-MM-DD format.")

    def read_person(self) -> PersonCreate:
        """Collect the details of a new person."""
        return PersonCreate(
            first_name=self.read_string("Enter First Name"),
            last_name=self.read_string("Enter Last Name"),
            email=self.read_string("Enter Email", allow_blank=True),
            phone=self.read_string("Enter Phone", allow_blank=True),
            address=self.read_string("Enter Address", allow_blank=True),
        )
