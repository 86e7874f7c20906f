"""Fixed-width text accumulator for command entry."""

MAX_LENGTH = 10


class InputBuffer:
    """Bounded buffer of Unicode code points.

    Characters past the capacity are dropped silently, as is anything
    that is not a single code point. Content is never validated here;
    the controller decides what a committed string means.
    """

    def __init__(self, capacity: int = MAX_LENGTH) -> None:
        self.capacity = capacity
        self._chars: list[str] = []

    def append(self, char: str) -> str:
        """Append one character unless the buffer is full."""
        if len(char) == 1 and len(self._chars) < self.capacity:
            self._chars.append(char)
        return self.text

    def backspace(self) -> str:
        """Remove the last code point, if any."""
        if self._chars:
            self._chars.pop()
        return self.text

    def current(self) -> str:
        """Buffer content right-padded with spaces to the capacity."""
        return self.text.ljust(self.capacity)

    def clear(self) -> str:
        self._chars.clear()
        return self.text

    @property
    def text(self) -> str:
        return "".join(self._chars)

    def __len__(self) -> int:
        return len(self._chars)
