"""Data structures for the file system."""

import struct
from typing import List, Optional

from constants import INODE_SIZE, MAX_FILENAME, POINTERS_PER_INODE

INODE_FORMAT = f'<{MAX_FILENAME}sI{POINTERS_PER_INODE}I'


class Inode:
    """Represents an inode record: name, block count and direct pointers.

    A slot whose name is None is free. There is no separate valid flag.
    """

    def __init__(self, name: Optional[str] = None):
        self.name = name
        self.size = 0  # blocks, not bytes
        self.pointers: List[int] = [0] * POINTERS_PER_INODE

    def is_free(self) -> bool:
        """True if the slot holds no file."""
        return not self.name

    def matches(self, name: str) -> bool:
        """Compare trimmed names."""
        return not self.is_free() and self.name.strip() == name.strip()

    def blocks(self) -> List[int]:
        """Pointers that are in use."""
        return self.pointers[:self.size]

    def copy(self) -> 'Inode':
        return Inode.unpack(self.pack())

    def pack(self) -> bytes:
        """Pack inode into bytes (68 bytes total)."""
        name_bytes = (self.name or '').encode('utf-8')
        return struct.pack(INODE_FORMAT, name_bytes, self.size, *self.pointers)

    @staticmethod
    def unpack(data: bytes) -> 'Inode':
        """Unpack inode from bytes."""
        if len(data) < INODE_SIZE:
            data = data + b'\x00' * (INODE_SIZE - len(data))

        values = struct.unpack(INODE_FORMAT, data[:INODE_SIZE])
        name = values[0].rstrip(b'\x00').decode('utf-8', errors='ignore')
        inode = Inode(name or None)
        inode.size = values[1]
        inode.pointers = list(values[2:])
        return inode

    def __repr__(self):
        return f"Inode(name={self.name!r}, size={self.size}, pointers={self.blocks()})"
