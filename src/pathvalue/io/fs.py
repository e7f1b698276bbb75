from abc import ABC, abstractmethod
from contextlib import contextmanager
from contextvars import ContextVar
from functools import lru_cache
from typing import Iterator, List, NamedTuple, Optional
from typing import override
import errno
import logging
import os
import stat
import tempfile
import uuid

import fsspec
from send2trash import send2trash

from .. import constants
from ..exceptions import ProtocolError
from . import posix

logger = logging.getLogger(__name__)


class DirEntry(NamedTuple):
    """A directory listing entry: child name plus its kind."""

    name: str
    type: str

    @property
    def is_file(self) -> bool:
        return self.type == constants.KIND_FILE

    @property
    def is_dir(self) -> bool:
        return self.type == constants.KIND_DIRECTORY


def _oserror(code: int, path: str) -> OSError:
    # OSError picks the matching subclass (IsADirectoryError, ...) from the errno
    return OSError(code, os.strerror(code), path)


# --------------------------------------------------------
#
# Abstract Base FileSystem Interface
#
# --------------------------------------------------------
"""
    Abstract Base FileSystem Interface,
    the primitives a Path maps its operations onto.
    Paths arrive as normalized strings; native OSErrors propagate untouched.
"""

class FileSystem(ABC):
    """Filesystem primitive Abstract Base Class"""

    name: str = "FileSystem"

    @abstractmethod
    def stat(self, path: str) -> os.stat_result:
        """Get file status, FileNotFoundError when absent"""
        pass

    @abstractmethod
    def mkdir(self, path: str, recursive: bool = True, mode: int = 0o777):
        """Create a directory, with intermediates when recursive"""
        pass

    @abstractmethod
    def copy(self, src: str, dst: str, recursive: bool = False):
        """Copy a file, or a directory tree when recursive"""
        pass

    @abstractmethod
    def rename(self, src: str, dst: str):
        """Move a path"""
        pass

    @abstractmethod
    def trash(self, path: str):
        """Move a path to the trash"""
        pass

    @abstractmethod
    def remove(self, path: str, recursive: bool = False):
        """Remove a file, an empty directory or (recursive) a tree"""
        pass

    @abstractmethod
    def listdir(self, path: str, recursive: bool = False) -> List[DirEntry]:
        """List directory contents, names relative to path"""
        pass

    @abstractmethod
    def read_text(self, path: str, encoding: str = constants.DEFAULT_ENCODING) -> str:
        """Read text from a file"""
        pass

    @abstractmethod
    def read_bytes(self, path: str) -> bytes:
        """Read bytes from a file"""
        pass

    @abstractmethod
    def write_text(self, path: str, content: str, encoding: str = constants.DEFAULT_ENCODING):
        """Write text to a file, replacing its content"""
        pass

    @abstractmethod
    def write_bytes(self, path: str, content: bytes):
        """Write bytes to a file, replacing its content"""
        pass

    @abstractmethod
    def temp_root(self) -> str:
        """Directory holding temporary directories"""
        pass

    @abstractmethod
    def make_temp_dir(self, prefix: str) -> str:
        """Create a unique directory named `prefix` + token, return its path"""
        pass


# --------------------
#
# Generic fsspec FileSystem
#
# --------------------

class FsspecFileSystem(FileSystem, ABC):
    """fsspec-based File System, shared by the disk and memory backends"""

    def __init__(self, protocol: str):
        self.fs = fsspec.filesystem(protocol)
        self.protocol = protocol
        self.name = f"{protocol}FS"

    # fsspec strips a trailing separator, so "file.txt/" would reach the
    # primitives as "file.txt". Both checks go through self.stat, which keeps it.

    def _check_dir_reference(self, path: str):
        """A path ending in a separator must be an existing directory"""
        if path.endswith(constants.SEP):
            self.stat(path)

    def _refuse_dir_reference(self, path: str, creating: bool = False):
        """File primitives fail on a path ending in a separator"""
        if not path.endswith(constants.SEP):
            return
        try:
            self.stat(path)
        except FileNotFoundError:
            if not creating:
                raise
        raise _oserror(errno.EISDIR, path)

    @override
    def copy(self, src: str, dst: str, recursive: bool = False):
        logger.debug(f"[{self.name}] Copying path '{src}' to '{dst}'")
        self._check_dir_reference(src)
        if not recursive:
            if self.fs.isdir(src):
                raise _oserror(errno.EISDIR, src)
            self._refuse_dir_reference(dst, creating=True)
            if self.fs.isdir(dst):
                raise _oserror(errno.EISDIR, dst)
        parent = posix.dirname(dst)
        if parent not in (constants.CURRENT_DIR, constants.SEP):
            self.fs.makedirs(parent, exist_ok=True)
        self.fs.copy(src, dst, recursive=recursive)

    @override
    def remove(self, path: str, recursive: bool = False):
        logger.debug(f"[{self.name}] Removing: {path} (recursive={recursive})")
        self._check_dir_reference(path)
        if not self.fs.isdir(path):
            self.fs.rm_file(path)
        elif recursive:
            self.fs.rm(path, recursive=True)
        else:
            self.fs.rmdir(path)

    @override
    def listdir(self, path: str, recursive: bool = False) -> List[DirEntry]:
        info = self.fs.info(path)
        if info["type"] != constants.KIND_DIRECTORY:
            raise _oserror(errno.ENOTDIR, path)
        if not recursive:
            return [
                DirEntry(posix.basename(child["name"]), child["type"])
                for child in self.fs.ls(path, detail=True)
            ]
        root = info["name"].rstrip(constants.SEP)
        found = self.fs.find(path, withdirs=True, detail=True)
        return [
            DirEntry(name[len(root):].lstrip(constants.SEP), child["type"])
            for name, child in found.items()
            if name.rstrip(constants.SEP) != root
        ]

    @override
    def read_text(self, path: str, encoding: str = constants.DEFAULT_ENCODING) -> str:
        logger.debug(f"[{self.name}] Reading from: {path}")
        self._refuse_dir_reference(path)
        with self.fs.open(path, "r", encoding=encoding) as f:
            return f.read()

    @override
    def read_bytes(self, path: str) -> bytes:
        logger.debug(f"[{self.name}] Reading bytes from: {path}")
        self._refuse_dir_reference(path)
        with self.fs.open(path, "rb") as f:
            return f.read()

    @override
    def write_text(self, path: str, content: str, encoding: str = constants.DEFAULT_ENCODING):
        logger.debug(f"[{self.name}] Writing to: {path}")
        self._refuse_dir_reference(path, creating=True)
        with self.fs.open(path, "w", encoding=encoding) as f:
            f.write(content)

    @override
    def write_bytes(self, path: str, content: bytes):
        logger.debug(f"[{self.name}] Writing bytes to: {path}")
        self._refuse_dir_reference(path, creating=True)
        with self.fs.open(path, "wb") as f:
            f.write(content)


# --------------------
#
# Disk FileSystem
#
# --------------------

class DiskFileSystem(FsspecFileSystem):
    """Local disk file system using fsspec"""

    def __init__(self):
        super().__init__(protocol="file")

    @override
    def stat(self, path: str) -> os.stat_result:
        """Get file status"""
        # os.stat keeps the trailing separator, so "file/" fails with ENOTDIR
        return os.stat(path)

    @override
    def mkdir(self, path: str, recursive: bool = True, mode: int = 0o777):
        logger.debug(f"[{self.name}] Creating directory: {path} (recursive={recursive})")
        if recursive:
            os.makedirs(path, mode=mode, exist_ok=True)
        else:
            os.mkdir(path, mode)

    @override
    def rename(self, src: str, dst: str):
        logger.debug(f"[{self.name}] Renaming path '{src}' to '{dst}'")
        os.rename(src, dst)

    @override
    def remove(self, path: str, recursive: bool = False):
        # Unlink the link itself, never what it points at
        if os.path.islink(path):
            logger.debug(f"[{self.name}] Removing link: {path}")
            os.unlink(path)
            return
        super().remove(path, recursive=recursive)

    @override
    def trash(self, path: str):
        logger.debug(f"[{self.name}] Trashing: {path}")
        send2trash(path)

    @override
    def temp_root(self) -> str:
        return tempfile.gettempdir()

    @override
    def make_temp_dir(self, prefix: str) -> str:
        head, tail = os.path.split(prefix)
        created = tempfile.mkdtemp(prefix=tail, dir=head or None)
        logger.debug(f"[{self.name}] Created temp directory: {created}")
        return created


# --------------------
#
# Memory (Fake) FileSystem
#
# --------------------

class MemoryFileSystem(FsspecFileSystem):
    """
    in-memory filesystem using fsspec,
    relative paths resolve against its root
    """

    def __init__(self):
        super().__init__(protocol="memory")

    def clear(self):
        """Drop every file and directory held in memory"""
        self.fs.store.clear()
        self.fs.pseudo_dirs.clear()
        self.fs.pseudo_dirs.append("")

    def _check_ancestors(self, path: str):
        """ENOTDIR when a file sits where a parent directory should be"""
        parent = posix.dirname(path)
        while parent not in (constants.CURRENT_DIR, constants.SEP):
            if self.fs.isfile(parent):
                raise _oserror(errno.ENOTDIR, path)
            parent = posix.dirname(parent)

    def _is_dir(self, info: dict) -> bool:
        return info.get("type") == constants.KIND_DIRECTORY

    @override
    def stat(self, path: str) -> os.stat_result:
        """Get file status, failing like os.stat on "file/" and "file/child" """
        try:
            stat_info = self.fs.info(path)
        except FileNotFoundError:
            self._check_ancestors(path)
            raise
        if path.endswith(constants.SEP) and not self._is_dir(stat_info):
            raise _oserror(errno.ENOTDIR, path)
        size = stat_info.get("size", 0) or 0
        # Infer mode, memory entries only carry a type
        mode = 0o040755 if self._is_dir(stat_info) else 0o100644
        return os.stat_result(
            (
                mode,  # st_mode
                0,  # st_ino
                0,  # st_dev
                1,  # st_nlink
                0,  # st_uid
                0,  # st_gid
                size,  # st_size
                0,  # st_atime
                0,  # st_mtime
                0,  # st_ctime
            )
        )

    @override
    def mkdir(self, path: str, recursive: bool = True, mode: int = 0o777):
        logger.debug(f"[{self.name}] Creating directory: {path} (recursive={recursive})")
        if recursive:
            self.fs.makedirs(path, exist_ok=True)
            return
        parent = posix.dirname(path)
        if parent not in (constants.CURRENT_DIR, constants.SEP) and not self.fs.isdir(parent):
            raise _oserror(errno.ENOENT, path)
        self.fs.mkdir(path, create_parents=False)

    @override
    def rename(self, src: str, dst: str):
        """
        Rename with os.rename rules: a directory replaces an empty directory,
        a file replaces a file, any other existing destination is an error.
        """
        logger.debug(f"[{self.name}] Renaming path '{src}' to '{dst}'")
        src_is_dir = stat.S_ISDIR(self.stat(src).st_mode)
        if dst.endswith(constants.SEP) and not src_is_dir:
            raise _oserror(errno.ENOTDIR, dst)
        parent = posix.dirname(dst)
        if parent not in (constants.CURRENT_DIR, constants.SEP) and not self.fs.isdir(parent):
            raise _oserror(errno.ENOENT, dst)
        if self.fs.exists(dst):
            dst_is_dir = self.fs.isdir(dst)
            if dst_is_dir and not src_is_dir:
                raise _oserror(errno.EISDIR, dst)
            if src_is_dir and not dst_is_dir:
                raise _oserror(errno.ENOTDIR, dst)
            if dst_is_dir:
                if self.fs.ls(dst):
                    raise _oserror(errno.ENOTEMPTY, dst)
                self.fs.rmdir(dst)
            else:
                self.fs.rm_file(dst)
        self.fs.mv(src, dst, recursive=True)

    @override
    def trash(self, path: str):
        if not self.fs.exists(path):
            raise _oserror(errno.ENOENT, path)
        self.fs.makedirs(constants.MEMORY_TRASH_DIR, exist_ok=True)
        target = posix.join(
            constants.MEMORY_TRASH_DIR,
            f"{posix.basename(path)}.{uuid.uuid4().hex[:constants.TEMP_TOKEN_LENGTH]}",
        )
        logger.debug(f"[{self.name}] Trashing: {path} -> {target}")
        self.fs.mv(path, target, recursive=True)

    @override
    def temp_root(self) -> str:
        return constants.MEMORY_TEMP_ROOT

    @override
    def make_temp_dir(self, prefix: str) -> str:
        parent = posix.dirname(prefix)
        if parent not in (constants.CURRENT_DIR, constants.SEP):
            self.fs.makedirs(parent, exist_ok=True)
        while True:
            candidate = prefix + uuid.uuid4().hex[:constants.TEMP_TOKEN_LENGTH]
            try:
                self.fs.mkdir(candidate, create_parents=False)
            except FileExistsError:
                continue
            logger.debug(f"[{self.name}] Created temp directory: {candidate}")
            return candidate


# --------------------------------------------------------
#
# Active backend
#
# --------------------------------------------------------

_BACKENDS = {
    "file": DiskFileSystem,
    "memory": MemoryFileSystem,
}

_active_fs: ContextVar[Optional[FileSystem]] = ContextVar("pathvalue_fs", default=None)


def create_fs(protocol: str = "file") -> FileSystem:
    """Create a filesystem backend for a protocol ("file" or "memory")."""
    backend = _BACKENDS.get(protocol)
    if backend is None:
        raise ProtocolError(
            f"No filesystem backend registered for protocol: '{protocol}'"
        )
    return backend()


@lru_cache(maxsize=None)
def default_fs() -> FileSystem:
    return create_fs("file")


def get_fs() -> FileSystem:
    """The backend Path operations run against in the current context."""
    fs = _active_fs.get()
    return fs if fs is not None else default_fs()


@contextmanager
def use_fs(fs: FileSystem) -> Iterator[FileSystem]:
    """Route Path operations to `fs` inside the block (per context/task)."""
    token = _active_fs.set(fs)
    try:
        yield fs
    finally:
        _active_fs.reset(token)
