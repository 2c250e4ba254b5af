"""Virtual memory over a hierarchical page table stored in physical frames."""

from __future__ import annotations

from dataclasses import dataclass

from .config import MemoryConfig
from .physical import PhysicalMemory

_ROOT = 0


class AddressError(ValueError):
    """A virtual address that cannot be mapped to physical memory."""


def split_address(address: int, config: MemoryConfig) -> tuple[int, int]:
    """Split a virtual address into its page index and offset."""
    return address >> config.offset_width, address & (config.page_size - 1)


def level_indices(page_index: int, config: MemoryConfig) -> tuple[int, ...]:
    """Return the table entry used at each level, from the root down.

    Every level takes ``offset_width`` bits, except the root, which takes
    whatever bits are left over.
    """
    width = config.offset_width
    total = config.virtual_address_width - width
    widths = [total % width or width] + [width] * (config.tables_depth - 1)
    indices = []
    shift = total
    for bits in widths:
        shift -= bits
        indices.append((page_index >> shift) & ((1 << bits) - 1))
    return tuple(indices)


def cyclical_distance(a: int, b: int, num_pages: int) -> int:
    """Distance between two page indices on a ring of ``num_pages`` pages."""
    d = abs(a - b)
    return min(d, num_pages - d)


@dataclass
class _FrameInfo:
    parent_entry: int | None
    page: int | None


class VirtualMemory:
    """Reads and writes words by virtual address, paging frames in and out."""

    def __init__(self, physical: PhysicalMemory) -> None:
        self.physical = physical
        self.config = physical.config

    def initialize(self) -> None:
        """Clear the root page table."""
        self._clear(_ROOT)

    def read(self, address: int) -> int:
        """Return the word at a virtual address."""
        return self.physical.read(self._resolve(address))

    def write(self, address: int, value: int) -> None:
        """Store a word at a virtual address."""
        self.physical.write(self._resolve(address), value)

    def _resolve(self, address: int) -> int:
        config = self.config
        if not 0 <= address < config.virtual_memory_size:
            raise AddressError(f"virtual address {address} out of range")
        page, offset = split_address(address, config)
        protected = {_ROOT}
        frame = _ROOT
        last = config.tables_depth - 1
        for depth, index in enumerate(level_indices(page, config)):
            entry = frame * config.page_size + index
            child = self.physical.read(entry)
            if child == 0:
                child = self._allocate(page, protected)
                self.physical.write(entry, child)
                if depth == last:
                    self.physical.restore(child, page)
            protected.add(child)
            frame = child
        return frame * config.page_size + offset

    def _scan(self) -> dict[int, _FrameInfo]:
        """Map every frame reachable from the root to its parent entry and page."""
        config = self.config
        frames = {_ROOT: _FrameInfo(None, None)}
        stack = [(_ROOT, 0, 0)]
        while stack:
            frame, depth, path = stack.pop()
            for offset in range(config.page_size):
                entry = frame * config.page_size + offset
                child = self.physical.read(entry)
                if child == 0:
                    continue
                child_path = (path << config.offset_width) | offset
                if depth + 1 == config.tables_depth:
                    frames[child] = _FrameInfo(entry, child_path)
                else:
                    frames[child] = _FrameInfo(entry, None)
                    stack.append((child, depth + 1, child_path))
        return frames

    def _allocate(self, page: int, protected: set[int]) -> int:
        config = self.config
        frames = self._scan()

        for frame in sorted(frames):
            info = frames[frame]
            if frame in protected or info.page is not None or not self._is_empty(frame):
                continue
            self.physical.write(info.parent_entry, 0)
            return frame

        next_frame = max(frames) + 1
        if next_frame < config.num_frames:
            self._clear(next_frame)
            return next_frame

        candidates = [
            frame
            for frame in sorted(frames)
            if frames[frame].page is not None and frame not in protected
        ]
        if not candidates:
            raise AddressError("no frame can be freed for the page")
        victim = max(
            candidates,
            key=lambda f: cyclical_distance(page, frames[f].page, config.num_pages),
        )
        info = frames[victim]
        self.physical.evict(victim, info.page)
        self.physical.write(info.parent_entry, 0)
        self._clear(victim)
        return victim

    def _frame_addresses(self, frame: int) -> range:
        start = frame * self.config.page_size
        return range(start, start + self.config.page_size)

    def _is_empty(self, frame: int) -> bool:
        return all(self.physical.read(a) == 0 for a in self._frame_addresses(frame))

    def _clear(self, frame: int) -> None:
        for address in self._frame_addresses(frame):
            self.physical.write(address, 0)