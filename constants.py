"""Global constants for the file system."""

# Block and size constants
BLOCK_SIZE = 512  # bytes per block
NUM_BLOCKS = 1000  # data blocks
NUM_INODES = 100
POINTERS_PER_INODE = 8  # Direct pointers
MAX_FILENAME = 32  # Width of the reserved name field
INODE_SIZE = MAX_FILENAME + 4 + 4 * POINTERS_PER_INODE  # 68 bytes
INODES_PER_BLOCK = BLOCK_SIZE // INODE_SIZE  # 7 inodes per block
MAX_FILE_SIZE = POINTERS_PER_INODE * BLOCK_SIZE

INVALID_DESCRIPTOR = -1
