"""A four-character captcha code generator and checker."""

from __future__ import annotations

import random
import string

__all__ = ["Captcha"]

_LENGTH = 4


class Captcha:
    """Holds a random code of digits and letters and checks guesses against it."""

    def __init__(self, ignore_case: bool = False, rng: random.Random | None = None) -> None:
        self.ignore_case = ignore_case
        self._rng = rng if rng is not None else random.Random()
        self._code = ""
        self.refresh()

    @property
    def code(self) -> str:
        return self._code

    def refresh(self) -> str:
        """Draw a new code and return it."""
        pools = (string.digits, string.ascii_uppercase, string.ascii_lowercase)
        self._code = "".join(
            self._rng.choice(pools[self._rng.randrange(len(pools))]) for _ in range(_LENGTH)
        )
        return self._code

    def verify(self, code: str) -> bool:
        if self.ignore_case:
            return self._code.upper() == code.upper()
        return self._code == code