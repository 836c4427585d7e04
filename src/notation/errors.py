"""Error taxonomy shared by the bar|beat notation codec.

Lower layers (pitch names, bar|beat strings) raise without a token index;
the parser re-raises with the index of the offending token so tool callers
can build a message without re-parsing the notation.
"""
from __future__ import annotations


class NotationError(ValueError):
    """Base error for notation and bar|beat conversions."""

    def __init__(
        self,
        message: str,
        *,
        token: str | None = None,
        index: int | None = None,
        expected: str | None = None,
    ) -> None:
        self.reason = message
        self.token = token
        self.index = index
        self.expected = expected
        super().__init__(self._render())

    def _render(self) -> str:
        parts = [self.reason]
        if self.token is not None and self.index is not None:
            parts.append(f"(token {self.token!r} at index {self.index})")
        elif self.token is not None:
            parts.append(f"(token {self.token!r})")
        if self.expected:
            parts.append(f"Expected {self.expected}")
        return " ".join(parts)

    def with_index(self, index: int, token: str | None = None) -> NotationError:
        """Return a copy of the error anchored at a token position."""

        return type(self)(
            self.reason,
            token=token if token is not None else self.token,
            index=index,
            expected=self.expected,
        )


class NotationSyntaxError(NotationError):
    """Raised when a token does not match the notation grammar."""


class NotationRangeError(NotationError):
    """Raised when a numeric value falls outside its legal domain."""


class TimeSignatureError(NotationRangeError):
    """Raised for a non-positive numerator or an unsupported denominator."""


__all__ = [
    "NotationError",
    "NotationSyntaxError",
    "NotationRangeError",
    "TimeSignatureError",
]
