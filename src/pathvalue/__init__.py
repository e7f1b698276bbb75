"""
pathvalue

An immutable, normalized filesystem path value plus a thin set of
asynchronous filesystem operations keyed off it.

Main modules:
- io: the Path type, its normalization algorithms and filesystem backends
- config: settings read from PATHVALUE_* environment variables
- exceptions: the library's error taxonomy
- cli: command line front-end
- utils: logging setup

Quick start example:
```python
import asyncio
from pathvalue import Path

async def main():
    tmp = await Path.make_temp_dir()
    await tmp.join("nested/data.json").write_structured({"ok": True})
    print(await tmp.list_dir(recursive=True))

asyncio.run(main())
```
"""

from .io import (
    Path,
    DirEntry,
    FileSystem,
    DiskFileSystem,
    MemoryFileSystem,
    StandardDirs,
    create_fs,
    get_fs,
    use_fs,
)
from .config import Settings, get_settings
from .exceptions import (
    PathValueError,
    ConfigurationError,
    ConfigValidationError,
    InvalidInputError,
    InvalidSuffixError,
    NotAFilePathError,
    UnsupportedFormatError,
    ProtocolError,
    WrongTypeError,
    PathNotFoundError,
)

__version__ = "0.3.0"

__all__ = [
    # Version
    '__version__',
    # IO
    'Path',
    'DirEntry',
    'FileSystem',
    'DiskFileSystem',
    'MemoryFileSystem',
    'StandardDirs',
    'create_fs',
    'get_fs',
    'use_fs',
    # Config
    'Settings',
    'get_settings',
    # Exceptions
    'PathValueError',
    'ConfigurationError',
    'ConfigValidationError',
    'InvalidInputError',
    'InvalidSuffixError',
    'NotAFilePathError',
    'UnsupportedFormatError',
    'ProtocolError',
    'WrongTypeError',
    'PathNotFoundError',
]
