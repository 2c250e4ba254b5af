"""Simulated RAM made of frames, backed by a swap area keyed by page index."""

from __future__ import annotations

from .config import MemoryConfig


class PhysicalMemoryError(IndexError):
    """An access outside physical memory or an invalid swap operation."""


class PhysicalMemory:
    """Word-addressable RAM split into frames, with a swap area for pages."""

    def __init__(self, config: MemoryConfig | None = None) -> None:
        self.config = config if config is not None else MemoryConfig()
        self._frames = [[0] * self.config.page_size for _ in range(self.config.num_frames)]
        self._swap: dict[int, list[int]] = {}
        self.evictions = 0

    def _locate(self, address: int) -> tuple[int, int]:
        if not 0 <= address < self.config.ram_size:
            raise PhysicalMemoryError(f"physical address {address} out of range")
        return divmod(address, self.config.page_size)

    def _check_frame(self, frame_index: int) -> None:
        if not 0 <= frame_index < self.config.num_frames:
            raise PhysicalMemoryError(f"frame {frame_index} out of range")

    def read(self, address: int) -> int:
        """Return the word at a physical address."""
        frame, offset = self._locate(address)
        return self._frames[frame][offset]

    def write(self, address: int, value: int) -> None:
        """Store a word at a physical address."""
        frame, offset = self._locate(address)
        self._frames[frame][offset] = value

    def evict(self, frame_index: int, page_index: int) -> None:
        """Copy a frame's contents to swap under the given page index."""
        self._check_frame(frame_index)
        if not 0 <= page_index < self.config.num_pages:
            raise PhysicalMemoryError(f"page {page_index} out of range")
        if page_index in self._swap:
            raise PhysicalMemoryError(f"page {page_index} is already swapped out")
        self._swap[page_index] = list(self._frames[frame_index])
        self.evictions += 1

    def restore(self, frame_index: int, page_index: int) -> None:
        """Move a swapped page back into a frame.

        A page that was never evicted is left as is: its first use needs
        no contents.
        """
        self._check_frame(frame_index)
        page = self._swap.pop(page_index, None)
        if page is not None:
            self._frames[frame_index] = page

    def dump(self) -> str:
        """Return every word of RAM as ``address: value`` lines."""
        return "\n".join(
            f"{address}: {self.read(address)}" for address in range(self.config.ram_size)
        )