import logging
import pytest

from disk_emulator import DiskEmulator
from file_system import FileSystem


def workload_message(i):
    """Message for the i-th file: i+1 numbered sentences."""
    return "".join(f"This is some text {j}.  " for j in range(i + 1))


class StandardTestFixture(object):

    # Overridden by tests that need a smaller disk or another mode.
    disk_blocks = None
    disk_inodes = None
    fs_options = {}

    @staticmethod
    def assert_equal(a, b, msg=""):
        assert a == b, msg


    @staticmethod
    def assert_raises(exc, func, *a, **kw):
        with pytest.raises(exc):
            func(*a, **kw)


    # Pytest skips classes with __init__ methods, so every test gets a fresh file system here.
    def setup_method(self, method):
        logging.debug(f"Constructing {type(self).__name__}.{method.__name__}")
        sizes = {}
        if self.disk_blocks is not None:
            sizes['blocks'] = self.disk_blocks
        if self.disk_inodes is not None:
            sizes['inodes'] = self.disk_inodes
        self.fs = FileSystem(DiskEmulator(**sizes), **self.fs_options)


    def make_file(self, name, data=None, close=True):
        fd = self.fs.create(name)
        if data is not None:
            self.fs.write(fd, data)
        if close:
            self.fs.close(fd)
        return fd


    def populate(self, count):
        for i in range(count):
            self.make_file(f"file{i}.txt", workload_message(i))
