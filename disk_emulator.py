"""Disk emulator for block-level I/O operations."""

import logging

from constants import BLOCK_SIZE, INODE_SIZE, INODES_PER_BLOCK, NUM_BLOCKS, NUM_INODES
from errors import OutOfBoundsError
from structures import Inode

logger = logging.getLogger(__name__)


def ceildiv(a: int, b: int) -> int:
    """Compute ceil(a/b); i.e. rounded towards positive infinity"""
    return 1 + (a - 1) // b


class DiskEmulator:
    """Emulates a disk as an in-memory array of fixed-size blocks.

    The image holds a reserved inode region followed by `blocks` data
    blocks. Block numbers passed to read() and write() are data block
    indices, 0 to blocks-1.
    """

    def __init__(self, blocks: int = NUM_BLOCKS, inodes: int = NUM_INODES):
        if blocks < 1 or inodes < 1:
            raise ValueError("Disk needs at least one data block and one inode")
        self.blocks = blocks
        self.inodes = inodes
        self.inode_blocks = ceildiv(inodes, INODES_PER_BLOCK)
        self.reads = 0
        self.writes = 0
        self.image = bytearray()
        self.format()

    def format(self):
        """Reset every block, inode region included, to zeros."""
        self.image = bytearray((self.inode_blocks + self.blocks) * BLOCK_SIZE)
        self.reads = 0
        self.writes = 0
        logger.info(f"Format complete: {self.blocks} blocks, {self.inodes} inodes, "
                    f"{self.inode_blocks} inode blocks")

    def read(self, block_num: int) -> bytes:
        """Read a data block."""
        if block_num < 0 or block_num >= self.blocks:
            raise OutOfBoundsError(f"Invalid block number {block_num}")
        return self._read_raw(self.inode_blocks + block_num)

    def write(self, block_num: int, data: bytes):
        """Replace a data block, zero-padding short data."""
        if block_num < 0 or block_num >= self.blocks:
            raise OutOfBoundsError(f"Invalid block number {block_num}")
        self._write_raw(self.inode_blocks + block_num, data)

    def read_inode(self, inode_num: int) -> Inode:
        """Load an inode from the inode region."""
        block_num, offset = self._locate_inode(inode_num)
        data = self._read_raw(block_num)
        return Inode.unpack(data[offset:offset + INODE_SIZE])

    def write_inode(self, inode: Inode, inode_num: int):
        """Save an inode into the inode region."""
        block_num, offset = self._locate_inode(inode_num)
        block_data = bytearray(self._read_raw(block_num))
        block_data[offset:offset + INODE_SIZE] = inode.pack()
        self._write_raw(block_num, bytes(block_data))

    def _locate_inode(self, inode_num: int):
        if inode_num < 0 or inode_num >= self.inodes:
            raise OutOfBoundsError(f"Invalid inode number {inode_num}")
        return inode_num // INODES_PER_BLOCK, (inode_num % INODES_PER_BLOCK) * INODE_SIZE

    def _read_raw(self, physical: int) -> bytes:
        start = physical * BLOCK_SIZE
        self.reads += 1
        return bytes(self.image[start:start + BLOCK_SIZE])

    def _write_raw(self, physical: int, data: bytes):
        if len(data) > BLOCK_SIZE:
            raise ValueError(f"Data must be at most {BLOCK_SIZE} bytes")
        start = physical * BLOCK_SIZE
        self.image[start:start + BLOCK_SIZE] = data.ljust(BLOCK_SIZE, b'\x00')
        self.writes += 1
