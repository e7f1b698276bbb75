"""
pathvalue IO Module

- Path: immutable, normalized path value with async filesystem operations
- posix: the pure normalization / segment algorithms behind Path
- FileSystem: Abstract filesystem primitive interface
- DiskFileSystem: Local disk file system
- MemoryFileSystem: In-memory file system for testing
- get_fs / use_fs: the backend Path operations run against
- home_dir / standard_dirs: cached per-user directories

Usage:
    from pathvalue.io import Path, MemoryFileSystem, use_fs

    with use_fs(MemoryFileSystem()):
        config = await Path("app/config.json").write_structured({"debug": True})
"""

from . import posix
from .path import Path, file_url_to_path
from .fs import (
    DirEntry,
    FileSystem,
    DiskFileSystem,
    MemoryFileSystem,
    create_fs,
    default_fs,
    get_fs,
    use_fs,
)
from .dirs import StandardDirs, home_dir, standard_dirs, resolve_standard_dirs

__all__ = [
    # Path
    'Path',
    'posix',
    'file_url_to_path',
    # FileSystem
    'DirEntry',
    'FileSystem',
    'DiskFileSystem',
    'MemoryFileSystem',
    'create_fs',
    'default_fs',
    'get_fs',
    'use_fs',
    # Directories
    'StandardDirs',
    'home_dir',
    'standard_dirs',
    'resolve_standard_dirs',
]
