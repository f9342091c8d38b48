"""Exceptions raised by the file system."""

import errno


class FileSystemError(IOError):
    """Base class for file system errors."""

    code = errno.EIO

    def __init__(self, message: str):
        super().__init__(self.code, message)


class FileAlreadyExistsError(FileSystemError):
    code = errno.EEXIST


class InodeTableFullError(FileSystemError):
    code = errno.ENFILE


class DescriptorMismatchError(FileSystemError):
    code = errno.EBADF


class OutOfBoundsError(FileSystemError):
    code = errno.ENXIO


class DiskFullError(FileSystemError):
    code = errno.ENOSPC


class FileTooLargeError(FileSystemError):
    code = errno.EFBIG


class FileNameError(FileSystemError):
    code = errno.EINVAL


class BlockStateError(FileSystemError):
    """Allocate of a used block or deallocate of a free one."""


class NameTooLongError(FileNameError):
    code = errno.ENAMETOOLONG
