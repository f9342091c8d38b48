"""Interactive shell for file system operations."""

from typing import Optional

from constants import BLOCK_SIZE, INVALID_DESCRIPTOR
from errors import FileSystemError
from file_system import FileSystem


class Shell:
    """Interactive shell for file system operations."""

    def __init__(self, fs: Optional[FileSystem] = None):
        self.fs = fs if fs is not None else FileSystem()
        self.running = True

    def run(self):
        """Run the shell."""
        print("=" * 60)
        print("Block File System Simulator - Interactive Shell")
        print("=" * 60)
        print(f"Disk ready: {self.fs.disk.blocks} blocks of {BLOCK_SIZE} bytes, "
              f"{self.fs.disk.inodes} inodes")
        print("Type 'help' for available commands\n")

        while self.running:
            try:
                command = input("bfs> ").strip()
                if not command:
                    continue

                self.execute_command(command)

            except KeyboardInterrupt:
                print("\nUse 'exit' or 'quit' to exit")
            except EOFError:
                break

        print("\nGoodbye!")

    def execute_command(self, command: str):
        """Execute a shell command."""
        parts = command.split()
        if not parts:
            return

        cmd = parts[0].lower()
        args = parts[1:]

        # Command routing
        commands = {
            'help': self.cmd_help,
            'format': self.cmd_format,
            'create': self.cmd_create,
            'open': self.cmd_open,
            'close': self.cmd_close,
            'write': self.cmd_write,
            'cat': self.cmd_cat,
            'rm': self.cmd_rm,
            'ls': self.cmd_ls,
            'stat': self.cmd_stat,
            'debug': self.cmd_debug,
            'check': self.cmd_check,
            'exit': self.cmd_exit,
            'quit': self.cmd_exit,
        }

        if cmd not in commands:
            print(f"Unknown command: {cmd}. Type 'help' for available commands.")
            return

        try:
            commands[cmd](args)
        except FileSystemError as e:
            print(f"Error: {e.strerror}")

    def cmd_help(self, args):
        """Display help information."""
        print("\nAvailable Commands:")
        print("  format              - Wipe the disk")
        print("  create <file>       - Create and open a new file")
        print("  open <file>         - Open a file")
        print("  close <fd>          - Close an open file")
        print("  write <fd> <text>   - Replace the contents of an open file")
        print("  cat <fd>            - Display the contents of an open file")
        print("  rm <file>           - Delete a file")
        print("  ls                  - List files")
        print("  stat <file>         - Display file statistics")
        print("  debug               - Display block and inode usage")
        print("  check               - Verify the free block bitmap")
        print("  help                - Display this help message")
        print("  exit, quit          - Exit the shell\n")

    def cmd_format(self, args):
        """Format the file system."""
        self.fs.format()
        print("File system formatted successfully")

    def cmd_create(self, args):
        """Create a new file."""
        if not args:
            print("Usage: create <filename>")
            return

        fd = self.fs.create(args[0])
        print(f"Created file '{args[0]}' with descriptor {fd}")

    def cmd_open(self, args):
        """Open a file."""
        if not args:
            print("Usage: open <filename>")
            return

        fd = self.fs.open(args[0])
        if fd == INVALID_DESCRIPTOR:
            print(f"Error: File '{args[0]}' not found")
        else:
            print(f"Opened '{args[0]}' with descriptor {fd}")

    def cmd_close(self, args):
        """Close a file."""
        fd = self._parse_fd(args, "close <fd>")
        if fd is None:
            return

        self.fs.close(fd)
        print(f"Closed descriptor {fd}")

    def cmd_write(self, args):
        """Write text to a file."""
        if len(args) < 2:
            print("Usage: write <fd> <text>")
            return
        fd = self._parse_fd(args, "write <fd> <text>")
        if fd is None:
            return

        before = self.fs.get_number_of_blocks_allocated()
        bytes_written = self.fs.write(fd, ' '.join(args[1:]))
        after = self.fs.get_number_of_blocks_allocated()
        print(f"Wrote {bytes_written} bytes to descriptor {fd}")
        print(f"  Blocks allocated: {before} → {after}")

    def cmd_cat(self, args):
        """Display file contents."""
        fd = self._parse_fd(args, "cat <fd>")
        if fd is None:
            return

        text = self.fs.read(fd)
        print(text if text else "(empty file)")

    def cmd_rm(self, args):
        """Delete a file."""
        if not args:
            print("Usage: rm <filename>")
            return

        if self.fs.delete(args[0]):
            print(f"Removed '{args[0]}'")
        else:
            print(f"Error: File '{args[0]}' not found")

    def cmd_ls(self, args):
        """List files."""
        entries = self.fs.ls()
        if not entries:
            print("(no files)")
            return

        print(f"\n{'Name':<34} {'Inode':<8} {'Blocks':<8}")
        print("-" * 52)
        for name, inode_num, size in entries:
            print(f"{name:<34} {inode_num:<8} {size:<8}")
        print()

    def cmd_stat(self, args):
        """Display file statistics."""
        if not args:
            print("Usage: stat <filename>")
            return

        inode = self.fs.stat(args[0])
        if inode is None:
            print(f"Error: File '{args[0]}' not found")
            return

        print(f"\n{'='*60}")
        print(f"File Statistics for '{inode.name}'")
        print(f"{'='*60}")
        print(f"  Size:           {inode.size} blocks")
        print(f"  Direct Blocks:  {inode.blocks() or 'None'}")
        print(f"{'='*60}\n")

    def cmd_debug(self, args):
        """Display usage information."""
        stats = self.fs.debug()
        print("\n=== File System Debug ===")
        print(f"  Blocks:      {stats['used_blocks']} used, {stats['free_blocks']} free, "
              f"{stats['total_blocks']} total")
        print(f"  Inodes:      {stats['used_inodes']} used, {stats['total_inodes']} total")
        print(f"  Open files:  {stats['open_files'] or 'None'}")
        print(f"  Disk reads:  {stats['disk_reads']}")
        print(f"  Disk writes: {stats['disk_writes']}\n")

    def cmd_check(self, args):
        """Verify the free block bitmap."""
        problems = self.fs.check()
        if not any(problems.values()):
            print("File system is consistent")
            return

        for kind, blocks in problems.items():
            if blocks:
                print(f"  {kind}: {blocks}")

    def cmd_exit(self, args):
        """Exit the shell."""
        self.running = False

    @staticmethod
    def _parse_fd(args, usage: str) -> Optional[int]:
        if not args:
            print(f"Usage: {usage}")
            return None
        try:
            return int(args[0])
        except ValueError:
            print("Error: Invalid file descriptor")
            return None
