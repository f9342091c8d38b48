"""Main entry point for the file system simulator."""

import logging
import sys

from disk_emulator import DiskEmulator
from file_system import FileSystem
from shell import Shell


def main():
    """Main entry point."""
    args = [a for a in sys.argv[1:] if a not in ('-v', '--verbose')]
    verbose = len(args) != len(sys.argv) - 1

    if len(args) > 2 or any(a in ('-h', '--help') for a in args):
        print("Block File System Simulator")
        print("=" * 60)
        print("\nUsage: python main.py [-v] [num_blocks] [num_inodes]")
        print("\nExample:")
        print("  python main.py 1000 100")
        print("\nThis will create a 1000-block in-memory disk (500 KB of data)")
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s: %(levelname)s %(message)s")

    try:
        sizes = [int(a) for a in args]
        disk = DiskEmulator(*sizes)
    except ValueError as e:
        print(f"Error: Invalid disk size ({e})")
        sys.exit(1)

    # Run shell
    shell = Shell(FileSystem(disk))
    shell.run()


if __name__ == "__main__":
    main()
