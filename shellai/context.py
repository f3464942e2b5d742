"""Rolling buffer holding the tail of the last command's output."""

MAX_CONTEXT_CHARS = 1500


class ContextBuffer:
    """Keeps at most ``capacity`` trailing characters of the latest output.

    Each call to :meth:`replace` discards whatever was stored before, so the
    buffer only ever reflects a single command's output.
    """

    def __init__(self, capacity: int = MAX_CONTEXT_CHARS):
        if capacity < 1:
            raise ValueError("capacity must be a positive integer")
        self.capacity = capacity
        self._content = ""

    def replace(self, chunk: str) -> None:
        self.clear()
        self._content = chunk[-self.capacity :]

    def clear(self) -> None:
        self._content = ""

    def read(self) -> str:
        return self._content

    def __len__(self) -> int:
        return len(self._content)
