"""Command-line scenarios that exercise the virtual memory."""

from __future__ import annotations

import argparse
import sys

from .config import preset
from .physical import PhysicalMemory
from .virtual import AddressError, VirtualMemory


def _check(address: int, expected: int, actual: int) -> None:
    if actual != expected:
        raise RuntimeError(f"address {address}: expected {expected}, read {actual}")


def simple_scenario(memory: VirtualMemory) -> list[int]:
    """Write i to every fifth page for twice as many pages as frames; read them back."""
    config = memory.config
    count = 2 * config.num_frames
    addresses = [5 * i * config.page_size for i in range(count)]
    for i, address in enumerate(addresses):
        memory.write(address, i)
    values = []
    for i, address in enumerate(addresses):
        value = memory.read(address)
        _check(address, i, value)
        values.append(value)
    return values


def fill_scenario(memory: VirtualMemory) -> list[int]:
    """Write each address's own value across all of virtual memory; read it back."""
    size = memory.config.virtual_memory_size
    for address in range(size):
        memory.write(address, address)
    values = []
    for address in range(size):
        value = memory.read(address)
        _check(address, address, value)
        values.append(value)
    return values


def overwrite_scenario(memory: VirtualMemory) -> list[int]:
    """Write the first page twice over; read back the second round of values."""
    size = memory.config.page_size
    for i in range(2 * size):
        memory.write(i % size, i)
    values = []
    for address in range(size):
        value = memory.read(address)
        _check(address, address + size, value)
        values.append(value)
    return values


_SCENARIOS = {
    "simple": simple_scenario,
    "fill": fill_scenario,
    "overwrite": overwrite_scenario,
}


def main(argv: list[str] | None = None) -> int:
    """Run one scenario and report its outcome."""
    parser = argparse.ArgumentParser(
        prog="pagesim", description="Run a paged virtual memory scenario."
    )
    parser.add_argument("scenario", choices=sorted(_SCENARIOS))
    parser.add_argument("--preset", default="default", help="memory geometry to use")
    args = parser.parse_args(argv)
    try:
        config = preset(args.preset)
    except ValueError as exc:
        parser.error(str(exc))

    physical = PhysicalMemory(config)
    memory = VirtualMemory(physical)
    memory.initialize()
    try:
        values = _SCENARIOS[args.scenario](memory)
    except (AddressError, RuntimeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.scenario == "simple":
        for i, value in enumerate(values):
            print(f"reading from {i} {value}")
        print("success")
    elif args.scenario == "fill":
        print("success")
    else:
        print(physical.dump())
        print(physical.evictions)
    return 0


if __name__ == "__main__":
    sys.exit(main())