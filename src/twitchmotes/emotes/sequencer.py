"""Codepoint counter shared by every emote source during a run."""

from __future__ import annotations


class CodepointSequencer:
    """Hand out consecutive codepoints starting from a configured value.

    A single instance is threaded through the scanner and the catalogue
    fetcher so the assignment order (local, global, then each channel) is an
    explicit contract. Assignment finishes before any download starts, so the
    counter is never touched from worker threads.
    """

    def __init__(self, start: int) -> None:
        self._next = start
        self.start = start

    def next(self) -> int:
        """Return the current codepoint and advance by one."""
        value = self._next
        self._next += 1
        return value

    @property
    def peek(self) -> int:
        """Codepoint the next call to :meth:`next` will return."""
        return self._next

    @property
    def assigned(self) -> int:
        """Number of codepoints handed out so far."""
        return self._next - self.start

    def __repr__(self) -> str:
        return f"CodepointSequencer(start={self.start:#x}, next={self._next:#x})"


__all__ = ["CodepointSequencer"]
