from enum import Enum
from typing import Final, Optional


class Priority(Enum):
    NONE = ("", 0)
    A = ("A", 1)
    B = ("B", 2)
    C = ("C", 3)
    D = ("D", 4)
    E = ("E", 5)
    F = ("F", 6)

    @property
    def letter(self) -> str:
        return self.value[0]

    @property
    def rank(self) -> int:
        return self.value[1]

    @classmethod
    def from_string(cls, value: Optional[str]) -> "Priority":
        """Case-insensitive lookup; anything outside A-F is NONE."""
        token = normalize_priority(value or "", allow_unknown=True)
        for priority in cls:
            if priority.letter and priority.letter == token:
                return priority
        return cls.NONE

    def next(self) -> "Priority":
        """None -> A -> B -> ... -> F -> None."""
        order = list(Priority)
        return order[(order.index(self) + 1) % len(order)]

    def __bool__(self) -> bool:
        return self is not Priority.NONE


_LETTERS: Final[frozenset[str]] = frozenset("ABCDEF")


def normalize_priority(value: str, *, allow_unknown: bool = False) -> str:
    """Normalize priority input to an uppercase letter.

    Accepts `a`, `A` and the parenthesised `(a)` form.
    """
    token = (value or "").strip().strip("()").strip().upper()
    if not token:
        return token
    if token in _LETTERS:
        return token
    if allow_unknown:
        return ""
    raise ValueError(f"Invalid priority: {value!r}")


def parse_priorities(raw: str) -> list:
    """Parse comma-separated priority letters (CLI filter form)."""
    result = []
    for part in (raw or "").split(","):
        if not part.strip():
            continue
        priority = Priority.from_string(normalize_priority(part))
        if priority not in result:
            result.append(priority)
    return result
