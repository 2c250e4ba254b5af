import pytest

from pagesim.config import preset
from pagesim.physical import PhysicalMemory
from pagesim.virtual import (
    AddressError,
    VirtualMemory,
    cyclical_distance,
    level_indices,
    split_address,
)


def _memory(name):
    memory = VirtualMemory(PhysicalMemory(preset(name)))
    memory.initialize()
    return memory


@pytest.mark.parametrize("address", [0, 1, 15, 16, 0x12345, (1 << 20) - 1])
def test_split_address_round_trip(address):
    config = preset("default")
    page, offset = split_address(address, config)
    assert 0 <= offset < config.page_size
    assert (page << config.offset_width) | offset == address


@pytest.mark.parametrize("name", ["test1", "test2"])
def test_level_indices_recombine_to_page(name):
    config = preset(name)
    for page in range(config.num_pages):
        indices = level_indices(page, config)
        assert len(indices) == config.tables_depth
        value = 0
        for index in indices:
            assert 0 <= index < config.page_size
            value = (value << config.offset_width) | index
        assert value == page


@pytest.mark.parametrize("name", ["test1", "test2"])
def test_level_indices_distinct_for_every_page(name):
    config = preset(name)
    paths = {level_indices(page, config) for page in range(config.num_pages)}
    assert len(paths) == config.num_pages


def test_cyclical_distance_wraps_around():
    assert cyclical_distance(0, 99, 100) == 1
    assert cyclical_distance(99, 0, 100) == 1
    assert cyclical_distance(7, 7, 100) == 0


def test_cyclical_distance_bounded_by_half_ring():
    assert all(cyclical_distance(0, b, 16) <= 8 for b in range(16))
    assert all(cyclical_distance(3, b, 16) == cyclical_distance(b, 3, 16) for b in range(16))


def test_write_then_read():
    memory = _memory("default")
    memory.write(12345, 99)
    assert memory.read(12345) == 99


def test_unwritten_address_reads_zero():
    memory = _memory("default")
    memory.write(0, 5)
    assert memory.read(500) == 0


@pytest.mark.parametrize("address", [-1, 1 << 20])
def test_out_of_range_address_raises(address):
    memory = _memory("default")
    with pytest.raises(AddressError):
        memory.read(address)
    with pytest.raises(AddressError):
        memory.write(address, 1)


@pytest.mark.parametrize("name", ["test1", "test2"])
def test_fill_whole_virtual_memory(name):
    memory = _memory(name)
    size = memory.config.virtual_memory_size
    for address in range(size):
        memory.write(address, address)
    assert [memory.read(address) for address in range(size)] == list(range(size))
    assert memory.physical.evictions > 0


def test_pages_differing_in_top_bits_do_not_alias():
    memory = _memory("test1")
    high = memory.config.virtual_memory_size // 2
    memory.write(0, 1)
    memory.write(high, 2)
    assert memory.read(0) == 1
    assert memory.read(high) == 2


def test_data_survives_eviction():
    memory = _memory("test2")
    size = memory.config.page_size
    pages = [3, 200, 511, 700, 1000, 42, 900]
    for number, page in enumerate(pages):
        memory.write(page * size + 1, number + 100)
    assert memory.physical.evictions > 0
    assert [memory.read(page * size + 1) for page in pages] == [
        number + 100 for number in range(len(pages))
    ]


def test_initialize_forgets_mappings():
    memory = _memory("test2")
    memory.write(8, 31)
    memory.initialize()
    assert memory.read(8) == 0