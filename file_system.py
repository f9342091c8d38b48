"""Core file system implementation."""

import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple

from constants import (
    BLOCK_SIZE, INVALID_DESCRIPTOR, MAX_FILE_SIZE, MAX_FILENAME, POINTERS_PER_INODE
)
from disk_emulator import DiskEmulator, ceildiv
from errors import (
    BlockStateError, DescriptorMismatchError, DiskFullError, FileAlreadyExistsError,
    FileNameError, FileTooLargeError, InodeTableFullError, NameTooLongError,
    OutOfBoundsError
)
from free_block_list import FreeBlockList
from structures import Inode

logger = logging.getLogger(__name__)


class FileSystem:
    """Flat file system over one inode table and direct block pointers.

    Options:
        single_handle -- hold at most one open file. create and open replace
            it, delete drops it. When False, every descriptor returned by
            create/open stays valid until its own close or delete.
        reclaim_on_write -- free the blocks a file already holds before a
            write allocates new ones. When False, a rewrite leaks them.
        read_all_pointers -- read walks the whole pointer array instead of
            the first `size` entries.
    """

    def __init__(self, disk: Optional[DiskEmulator] = None, single_handle: bool = True,
                 reclaim_on_write: bool = True, read_all_pointers: bool = False):
        self.disk = disk if disk is not None else DiskEmulator()
        self.single_handle = single_handle
        self.reclaim_on_write = reclaim_on_write
        self.read_all_pointers = read_all_pointers
        self.free_blocks = FreeBlockList(self.disk.blocks)
        self.open_files: Dict[int, Inode] = {}
        self.format()

    def format(self):
        """Wipe the disk and start over with every block and inode free."""
        self.disk.format()
        self.free_blocks = FreeBlockList(self.disk.blocks)
        self.open_files = {}

    def create(self, name: str) -> int:
        """Claim the first free inode for `name` and open it.

        The new inode reaches the disk on close.
        """
        name = self._check_name(name)

        free_slot = INVALID_DESCRIPTOR
        for i in range(self.disk.inodes):
            # a single held handle is replaced, so only the disk copy counts
            inode = self.disk.read_inode(i) if self.single_handle else self._load(i)
            if inode.is_free():
                if free_slot < 0:
                    free_slot = i
            elif inode.matches(name):
                raise FileAlreadyExistsError(f"create: {name} already exists")

        if free_slot < 0:
            raise InodeTableFullError(f"create: unable to create {name}, no free inode")

        self._hold(free_slot, Inode(name))
        logger.debug(f"Created {name!r} in inode {free_slot}")
        return free_slot

    def open(self, name: str) -> int:
        """Open a file by name. Returns INVALID_DESCRIPTOR if it is missing."""
        for i in range(self.disk.inodes):
            inode = self._load(i)
            if inode.matches(name):
                self._hold(i, inode)
                return i

        if self.single_handle:
            self._release_all()
        return INVALID_DESCRIPTOR

    def close(self, fd: int):
        """Write the open inode back to its slot and release the descriptor."""
        inode = self._get_open_inode(fd, 'close')
        self.disk.write_inode(inode, fd)
        del self.open_files[fd]

    def read(self, fd: int) -> str:
        """Read the whole file as text.

        Padding is stripped from the last block of the file and from any
        pointer slots read past it.
        """
        inode = self._get_open_inode(fd, 'read')

        count = POINTERS_PER_INODE if self.read_all_pointers else inode.size
        blocks = [self.disk.read(block_num) for block_num in inode.pointers[:count]]
        content = b''.join(block.rstrip(b'\x00') if i >= inode.size - 1 else block
                           for i, block in enumerate(blocks))
        return content.decode('utf-8', errors='ignore')

    def write(self, fd: int, data: str) -> int:
        """Replace the file's content with `data`. Returns bytes written."""
        inode = self._get_open_inode(fd, 'write')

        payload = data.encode('utf-8')
        needed = ceildiv(len(payload), BLOCK_SIZE)
        if needed > POINTERS_PER_INODE:
            raise FileTooLargeError(f"write: {len(payload)} bytes exceed the "
                                    f"{MAX_FILE_SIZE} byte file limit")

        available = self.free_blocks.count_free()
        if self.reclaim_on_write:
            available += inode.size
        if needed > available:
            raise DiskFullError(f"write: need {needed} blocks, {available} free")

        if self.reclaim_on_write:
            self._deallocate_blocks(fd, inode)
        elif inode.size:
            logger.warning(f"Inode {fd} rewritten without freeing blocks {inode.blocks()}")

        pointers = self._allocate_blocks(fd, needed)
        inode.pointers[:needed] = pointers
        inode.size = needed

        for i, block_num in enumerate(pointers):
            self.disk.write(block_num, payload[i * BLOCK_SIZE:(i + 1) * BLOCK_SIZE])
        return len(payload)

    def delete(self, name: str) -> bool:
        """Free a file's blocks and its inode. Returns False if it is missing."""
        for i in range(self.disk.inodes):
            inode = self._load(i)
            if inode.matches(name):
                self._deallocate_blocks(i, inode)
                inode.name = None
                self.disk.write_inode(inode, i)

                if self.single_handle:
                    self.open_files.clear()
                else:
                    self.open_files.pop(i, None)
                return True
        return False

    def stat(self, name: str) -> Optional[Inode]:
        """Copy of the inode holding `name`, or None."""
        for _, inode in self._occupied():
            if inode.matches(name):
                return inode.copy()
        return None

    def ls(self) -> List[Tuple[str, int, int]]:
        """List (name, inode, blocks) for every file."""
        return [(inode.name, i, inode.size) for i, inode in self._occupied()]

    def get_number_of_blocks_allocated(self) -> int:
        return self.free_blocks.count_allocated()

    def usage(self) -> Dict[str, Any]:
        """Block, inode and disk I/O statistics."""
        used_inodes = len(self.ls())
        used_blocks = self.free_blocks.count_allocated()
        return {
            'total_blocks': self.disk.blocks,
            'used_blocks': used_blocks,
            'free_blocks': self.disk.blocks - used_blocks,
            'total_inodes': self.disk.inodes,
            'used_inodes': used_inodes,
            'open_files': sorted(self.open_files),
            'disk_reads': self.disk.reads,
            'disk_writes': self.disk.writes,
        }

    def debug(self) -> Dict[str, Any]:
        """Log every file and the usage statistics."""
        stats = self.usage()
        for i, inode in self._occupied():
            logger.info(f"Inode {i}: {inode.name!r}, {inode.size} blocks, pointers {inode.blocks()}")
        logger.info(f"Blocks: {stats['used_blocks']} used, {stats['free_blocks']} free; "
                    f"inodes: {stats['used_inodes']}/{stats['total_inodes']}; "
                    f"disk reads {stats['disk_reads']}, writes {stats['disk_writes']}")
        return stats

    def check(self) -> Dict[str, List[int]]:
        """Compare the bitmap against the pointers the inodes hold.

        leaked: allocated but referenced by no inode.
        dangling: referenced but not allocated.
        shared: referenced by more than one inode.
        """
        owners: Dict[int, List[int]] = {}
        for i, inode in self._occupied():
            for block_num in inode.blocks():
                owners.setdefault(block_num, []).append(i)

        allocated = set(self.free_blocks.allocated_blocks())
        return {
            'leaked': sorted(allocated - set(owners)),
            'dangling': sorted(b for b in owners if b not in allocated),
            'shared': sorted(b for b, inodes in owners.items() if len(inodes) > 1),
        }

    def rebuild_free_block_map(self):
        """Build free block bitmap by scanning inodes."""
        self.free_blocks.clear()
        for i, inode in self._occupied():
            for block_num in inode.blocks():
                if 0 <= block_num < self.free_blocks.blocks and self.free_blocks.is_free(block_num):
                    self.free_blocks.allocate(block_num)
                else:
                    logger.warning(f"Inode {i} points at unusable block {block_num}")

    def _allocate_blocks(self, inode_num: int, count: int) -> List[int]:
        """First-fit scan from block 0 for `count` free blocks."""
        logger.debug(f"Need to allocate {count} data blocks for inode {inode_num}")

        pointers = []
        for block_num in range(self.free_blocks.blocks):
            if len(pointers) == count:
                break
            if self.free_blocks.is_free(block_num):
                self.free_blocks.allocate(block_num)
                pointers.append(block_num)

        if len(pointers) < count:
            for block_num in pointers:
                self.free_blocks.deallocate(block_num)
            raise DiskFullError(f"write: need {count} blocks, found {len(pointers)}")

        logger.debug(f"Blocks allocated for inode {inode_num}: {pointers}")
        return pointers

    def _deallocate_blocks(self, inode_num: int, inode: Inode) -> int:
        """Free the blocks an inode holds, skipping any that cannot be freed."""
        freed = []
        for block_num in inode.blocks():
            try:
                self.free_blocks.deallocate(block_num)
            except (BlockStateError, OutOfBoundsError):
                logger.warning(f"Unable to deallocate block {block_num} for inode {inode_num}",
                               exc_info=True)
                continue
            freed.append(block_num)

        inode.size = 0
        if freed:
            logger.debug(f"Blocks {freed} deallocated for inode {inode_num}")
        return len(freed)

    def _load(self, inode_num: int) -> Inode:
        """Open inodes are read from memory, the rest from disk."""
        inode = self.open_files.get(inode_num)
        if inode is None:
            inode = self.disk.read_inode(inode_num)
        return inode

    def _occupied(self) -> Iterator[Tuple[int, Inode]]:
        for i in range(self.disk.inodes):
            inode = self._load(i)
            if not inode.is_free():
                yield i, inode

    def _hold(self, fd: int, inode: Inode):
        if self.single_handle:
            held = self.open_files.get(fd)
            self._release_all(keep=fd if held is inode else INVALID_DESCRIPTOR)
        self.open_files[fd] = inode

    def _release_all(self, keep: int = INVALID_DESCRIPTOR):
        for fd in list(self.open_files):
            if fd != keep:
                logger.warning(f"Dropping unclosed descriptor {fd}")
                del self.open_files[fd]

    def _get_open_inode(self, fd: int, operation: str) -> Inode:
        inode = self.open_files.get(fd)
        if inode is None:
            raise DescriptorMismatchError(f"{operation}: file descriptor {fd} does not match "
                                          f"the descriptor of an open file")
        return inode

    @staticmethod
    def _check_name(name: str) -> str:
        name = name.strip()
        if not name:
            raise FileNameError("File name is empty")
        if len(name.encode('utf-8')) > MAX_FILENAME:
            raise NameTooLongError(f"File name {name!r} is longer than {MAX_FILENAME} bytes")
        return name
