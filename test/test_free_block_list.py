import errno

import pytest

from errors import BlockStateError, OutOfBoundsError
from free_block_list import FreeBlockList


def test_starts_all_free():
    blocks = FreeBlockList(13)
    assert len(blocks.bitmap) == 2
    assert all(blocks.is_free(i) for i in range(13))
    assert blocks.count_allocated() == 0
    assert blocks.count_free() == 13


def test_allocate_and_deallocate():
    blocks = FreeBlockList(16)
    blocks.allocate(0)
    blocks.allocate(9)
    assert not blocks.is_free(0)
    assert not blocks.is_free(9)
    assert blocks.is_free(8)
    assert blocks.count_allocated() == 2
    assert blocks.allocated_blocks() == [0, 9]

    blocks.deallocate(9)
    assert blocks.is_free(9)
    assert blocks.count_allocated() == 1


def test_bits_are_independent():
    blocks = FreeBlockList(8)
    for i in range(8):
        blocks.allocate(i)
    blocks.deallocate(3)
    assert blocks.bitmap[0] == 0b11110111


def test_double_allocate_rejected():
    blocks = FreeBlockList(8)
    blocks.allocate(5)
    with pytest.raises(BlockStateError) as info:
        blocks.allocate(5)
    assert info.value.errno == errno.EIO
    assert blocks.count_allocated() == 1


def test_double_free_rejected():
    blocks = FreeBlockList(8)
    with pytest.raises(BlockStateError):
        blocks.deallocate(2)


@pytest.mark.parametrize("block_num", [-1, 8])
def test_out_of_range(block_num):
    blocks = FreeBlockList(8)
    with pytest.raises(OutOfBoundsError):
        blocks.is_free(block_num)
    with pytest.raises(OutOfBoundsError):
        blocks.allocate(block_num)


def test_clear():
    blocks = FreeBlockList(10)
    blocks.allocate(1)
    blocks.allocate(9)
    blocks.clear()
    assert blocks.count_allocated() == 0
