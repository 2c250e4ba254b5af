# pagesim

A small simulator of virtual memory backed by a hierarchical page table.
Words of virtual memory are mapped through a tree of page tables stored in
a simulated RAM of fixed-size frames. When RAM runs out, a page is evicted
to a swap area and restored on its next use.

## How it works

- A virtual address is split into a page index and an offset
  (`split_address`).
- The page index is split into one entry index per table level, from the
  root down (`level_indices`). Every level uses `offset_width` bits; the
  root uses whatever bits are left over. The root table always lives in
  frame 0.
- When a missing table or page is needed, a frame is chosen in this order:
  1. a table frame reachable from the root that holds only zeros and is
     not on the path currently being walked; it is unlinked from its
     parent and reused;
  2. the frame after the highest frame in use, if RAM has room for it;
  3. otherwise the frame holding the page at the greatest cyclical
     distance (`cyclical_distance`) from the page being brought in. That
     page is evicted to swap, unlinked from its table and the frame is
     cleared.
- A page brought into a frame is restored from swap if it was evicted
  earlier; a page never evicted starts as whatever the cleared frame holds.

## Configuration

`pagesim.config.MemoryConfig` is a frozen dataclass holding the bit widths
(`offset_width`, `physical_address_width`, `virtual_address_width`) and
derived sizes as properties: `page_size`, `ram_size`,
`virtual_memory_size`, `num_frames`, `num_pages` and `tables_depth`.
Inconsistent widths, or too few frames to hold one path of tables and a
page, raise `ValueError`.

`preset(name)` returns one of three configurations:

| preset    | offset | physical | virtual |
|-----------|--------|----------|---------|
| `default` | 4      | 10       | 20      |
| `test1`   | 1      | 4        | 5       |
| `test2`   | 2      | 5        | 12      |

An unknown name raises `ValueError`.

## Using it from Python

```python
from pagesim.config import preset
from pagesim.physical import PhysicalMemory
from pagesim.virtual import VirtualMemory

physical = PhysicalMemory(preset("default"))
memory = VirtualMemory(physical)
memory.initialize()

memory.write(1234, 42)
assert memory.read(1234) == 42
```

- `VirtualMemory.read` / `write` raise `AddressError` for an address
  outside the virtual address space, or when no frame can be freed.
- `PhysicalMemory` offers `read`, `write`, `evict` and `restore`; accesses
  out of range, or evicting a page that is already in swap, raise
  `PhysicalMemoryError`. Its `evictions` attribute counts evictions, and
  `dump()` returns the contents of RAM as `address: value` lines.

## Command line

Installing the package provides a `pagesim` command that runs one scenario
against a preset (`--preset`, default `default`):

```
pagesim simple
pagesim fill --preset test2
pagesim overwrite --preset test1
```

- `simple` writes `i` at the start of every fifth page, for twice as many
  pages as there are frames, then reads the values back and prints them
  followed by `success`.
- `fill` writes every virtual address with its own value and reads it all
  back, printing `success`. On the `default` preset this covers over a
  million words and takes a long time.
- `overwrite` writes the first page twice over, checks that the second
  round of values is read back, then prints the RAM dump and the number of
  evictions.

A value read back wrong, or an address that cannot be mapped, prints an
error and exits with status 1.

## Limits

The simulation lives only in memory: RAM and swap are not saved anywhere,
and there is no interactive mode beyond the fixed scenarios above.

## Running the tests

```
pip install -e ".[test]"
pytest
```