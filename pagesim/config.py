"""Geometry of the simulated memory: word, page, RAM and virtual address sizes."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MemoryConfig:
    """Bit widths that define a paged memory system.

    Pages and frames hold ``page_size`` words, which is also the number of
    entries in every page table.
    """

    offset_width: int = 4
    physical_address_width: int = 10
    virtual_address_width: int = 20
    word_width: int = 32
    weight_even: int = 4
    weight_odd: int = 2

    def __post_init__(self) -> None:
        if self.offset_width < 1:
            raise ValueError("offset_width must be at least 1")
        if self.physical_address_width < self.offset_width:
            raise ValueError("physical_address_width must not be below offset_width")
        if self.virtual_address_width <= self.offset_width:
            raise ValueError("virtual_address_width must exceed offset_width")
        if self.num_frames < self.tables_depth + 1:
            raise ValueError(
                f"{self.num_frames} frames cannot hold a path of "
                f"{self.tables_depth} tables and a page"
            )

    @property
    def page_size(self) -> int:
        """Words per page and per frame."""
        return 1 << self.offset_width

    @property
    def ram_size(self) -> int:
        """Words of physical memory."""
        return 1 << self.physical_address_width

    @property
    def virtual_memory_size(self) -> int:
        """Words of virtual memory."""
        return 1 << self.virtual_address_width

    @property
    def num_frames(self) -> int:
        """Frames in physical memory."""
        return self.ram_size // self.page_size

    @property
    def num_pages(self) -> int:
        """Pages in virtual memory."""
        return self.virtual_memory_size // self.page_size

    @property
    def tables_depth(self) -> int:
        """Number of page-table levels on the path from the root to a page."""
        bits = self.virtual_address_width - self.offset_width
        return -(-bits // self.offset_width)


_PRESETS = {
    "default": MemoryConfig(),
    "test1": MemoryConfig(offset_width=1, physical_address_width=4, virtual_address_width=5),
    "test2": MemoryConfig(offset_width=2, physical_address_width=5, virtual_address_width=12),
}


def preset(name: str) -> MemoryConfig:
    """Return one of the named configurations: default, test1 or test2."""
    try:
        return _PRESETS[name]
    except KeyError:
        known = ", ".join(sorted(_PRESETS))
        raise ValueError(f"unknown preset {name!r}; choose from {known}") from None