from __future__ import annotations


class CommandBuffer:
    """Script text collected from one or more arguments."""

    def __init__(self) -> None:
        self._parts: list[str] = []

    @property
    def text(self) -> str:
        return "".join(self._parts)

    @property
    def empty(self) -> bool:
        return not self._parts

    def append(self, token: str) -> None:
        self._parts.append(token)

    def separate(self) -> None:
        """Insert the single space that joins continued arguments."""
        self._parts.append(" ")

    def clear(self) -> None:
        self._parts.clear()
