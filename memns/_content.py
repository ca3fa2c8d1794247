import bisect


class AppendOnlyContent:
    """Append-only text buffer backing a leaf.

    Appends are stored as separate chunks so writing never copies existing
    content; ``_cumulative[i]`` is the total length through chunk ``i``.
    """

    __slots__ = ("_chunks", "_cumulative", "_size")

    def __init__(self) -> None:
        self._chunks: list[str] = []
        self._cumulative: list[int] = []
        self._size: int = 0

    def __len__(self) -> int:
        return self._size

    @property
    def chunk_count(self) -> int:
        return len(self._chunks)

    def append(self, text: str) -> int:
        if not isinstance(text, str):
            raise TypeError(f"Content must be str, not {type(text).__name__}")
        if not text:
            return 0
        self._chunks.append(text)
        self._size += len(text)
        self._cumulative.append(self._size)
        return len(text)

    def read(self, offset: int = 0, size: int = -1) -> str:
        if offset < 0:
            raise ValueError(f"Negative offset: {offset}")
        if offset >= self._size or size == 0:
            return ""
        end = self._size if size < 0 else min(offset + size, self._size)
        if offset == 0 and end == self._size:
            if len(self._chunks) > 1:
                # Compact so repeated full reads stay cheap.
                joined = "".join(self._chunks)
                self._chunks = [joined]
                self._cumulative = [self._size]
            return self._chunks[0]
        start_idx = bisect.bisect_right(self._cumulative, offset)
        pieces: list[str] = []
        for i in range(start_idx, len(self._chunks)):
            chunk_start = self._cumulative[i - 1] if i > 0 else 0
            if chunk_start >= end:
                break
            chunk = self._chunks[i]
            lo = max(offset - chunk_start, 0)
            hi = min(end - chunk_start, len(chunk))
            pieces.append(chunk[lo:hi])
        return "".join(pieces)

    def clear(self) -> None:
        self._chunks.clear()
        self._cumulative.clear()
        self._size = 0
