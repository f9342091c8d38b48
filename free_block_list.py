"""Free-block bitmap for the data region."""

from disk_emulator import ceildiv
from errors import BlockStateError, OutOfBoundsError


class FreeBlockList:
    """One bit per data block: 0 is free, 1 is allocated."""

    def __init__(self, blocks: int):
        self.blocks = blocks
        self.bitmap = bytearray(ceildiv(blocks, 8))

    def clear(self):
        """Mark every block free."""
        self.bitmap = bytearray(len(self.bitmap))

    def is_free(self, block_num: int) -> bool:
        byte, mask = self._locate(block_num)
        return (self.bitmap[byte] & mask) == 0

    def allocate(self, block_num: int):
        """Mark a free block as used."""
        byte, mask = self._locate(block_num)
        if self.bitmap[byte] & mask:
            raise BlockStateError(f"Block {block_num} is already allocated")
        self.bitmap[byte] |= mask

    def deallocate(self, block_num: int):
        """Mark a used block as free."""
        byte, mask = self._locate(block_num)
        if not self.bitmap[byte] & mask:
            raise BlockStateError(f"Block {block_num} is not allocated")
        self.bitmap[byte] &= ~mask

    def count_allocated(self) -> int:
        return sum(bin(byte).count('1') for byte in self.bitmap)

    def count_free(self) -> int:
        return self.blocks - self.count_allocated()

    def allocated_blocks(self):
        """Indices of every allocated block, ascending."""
        return [i for i in range(self.blocks) if not self.is_free(i)]

    def _locate(self, block_num: int):
        if block_num < 0 or block_num >= self.blocks:
            raise OutOfBoundsError(f"Invalid block number {block_num}")
        return block_num // 8, 1 << (block_num % 8)
