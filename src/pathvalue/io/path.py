# pathvalue/io/path.py

import json
import logging
import stat
from typing import Any, List, Optional, Tuple, Union
from urllib.parse import ParseResult, SplitResult, unquote, urlsplit

import yaml

from .. import constants
from ..config import get_settings
from ..exceptions import (
    InvalidInputError,
    InvalidSuffixError,
    NotAFilePathError,
    UnsupportedFormatError,
    WrongTypeError,
)
from . import posix
from .decorators import offload, raise_not_found
from .fs import DirEntry, get_fs


logger = logging.getLogger(__name__)

URL = Union[ParseResult, SplitResult]
PathLike = Union[str, URL, "Path"]


def file_url_to_path(url: URL) -> str:
    """
    Decode a file-scheme URL into a plain filesystem path.
    """
    if url.scheme != constants.FILE_SCHEME:
        raise InvalidInputError(
            f"Only '{constants.FILE_SCHEME}' URLs can be used as paths, got scheme '{url.scheme}'"
        )
    if url.netloc not in constants.LOCAL_HOSTS:
        raise InvalidInputError(f"File URL host must be empty or 'localhost', got '{url.netloc}'")
    if "%2f" in url.path.lower():
        raise InvalidInputError("File URL path must not include encoded / characters")
    return unquote(url.path) or constants.SEP


class Path:
    """
    An immutable, normalized POSIX path.

    Built from a string, a file URL (`urllib.parse` result or a `file://`
    string) or another Path; the stored string is always normalized. Path
    algebra (join, parent, basename, ...) is pure. Filesystem operations are
    coroutines run against the active backend, see `pathvalue.io.fs.use_fs`.
    """

    __slots__ = ("_path",)

    def __init__(self, path: PathLike):
        if isinstance(path, Path):
            raw = path._path
        elif isinstance(path, (ParseResult, SplitResult)):
            raw = file_url_to_path(path)
        elif isinstance(path, str):
            if path.startswith(constants.FILE_URL_PREFIX):
                raw = file_url_to_path(urlsplit(path))
            else:
                raw = path
        else:
            raise InvalidInputError(
                f"Invalid path: expected str, file URL or Path, got {type(path).__name__}"
            )
        object.__setattr__(self, "_path", posix.normalize(raw))

    def __setattr__(self, name, value):
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    @property
    def path(self) -> str:
        return self._path

    def __str__(self) -> str:
        return self._path

    def __fspath__(self) -> str:
        return self._path

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}('{self._path}')"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self._path == other._path

    def __hash__(self) -> int:
        return hash(self._path)

    def __truediv__(self, other) -> "Path":
        return self.join(other)

    # --------------------
    #
    # Path algebra
    #
    # --------------------

    def join(self, *segments: Union[str, "Path"]) -> "Path":
        """Construct a new path by appending the given segments."""
        parts = []
        for segment in segments:
            if isinstance(segment, Path):
                parts.append(segment._path)
            elif isinstance(segment, str):
                parts.append(segment)
            else:
                raise InvalidInputError(
                    f"Invalid path segment: expected str or Path, got {type(segment).__name__}"
                )
        return Path(posix.join(self._path, *parts))

    def extend_basename(self, suffix: str) -> "Path":
        """
        Append `suffix` to the path string, e.g. `file.mp4` + `.hevc.mov`.

        The suffix must be a bare segment. Dots are never trimmed.
        """
        joined_suffix = posix.normalize(suffix)
        if joined_suffix != posix.basename(joined_suffix):
            raise InvalidSuffixError(f"Invalid suffix to extend file name: '{suffix}'")
        return Path(self._path + joined_suffix)

    @property
    def parent(self) -> "Path":
        return Path(posix.dirname(self._path))

    @property
    def dirname(self) -> "Path":
        """Deprecated alias for `.parent`."""
        return self.parent

    @property
    def basename(self) -> "Path":
        # Root has no final segment, so its basename is "."
        return Path(posix.basename(self._path))

    @property
    def extension(self) -> str:
        self._must_not_have_trailing_slash()
        return posix.extname(self._path)

    @property
    def extname(self) -> str:
        """Deprecated alias for `.extension`."""
        return self.extension

    @property
    def stem(self) -> str:
        name = posix.basename(self._path)
        ext = posix.extname(name)
        return name[: len(name) - len(ext)]

    @property
    def parts(self) -> Tuple[str, ...]:
        segments = [s for s in self._path.split(constants.SEP) if s]
        if self.is_absolute():
            return (constants.SEP, *segments)
        return tuple(segments)

    def is_absolute(self) -> bool:
        return posix.is_absolute(self._path)

    def _must_not_have_trailing_slash(self):
        if self._path.endswith(constants.SEP):
            raise NotAFilePathError(
                f"Path ends with a slash, which cannot be treated as a file: {self._path}"
            )

    # --------------------
    #
    # Filesystem operations
    #
    # --------------------

    async def exists(self, must_be: Optional[str] = None) -> bool:
        """
        Check whether the path exists, optionally as a "file" or "directory".

        A missing path returns False. A present path of the other kind raises
        WrongTypeError; a "file" check on a path ending in a slash raises
        NotAFilePathError.
        """
        if must_be is not None and must_be not in constants.PATH_KINDS:
            raise ValueError(f"Invalid path type constraint: {must_be!r}")
        try:
            stats = await offload(get_fs().stat, self._path)
        except FileNotFoundError:
            return False
        except NotADirectoryError:
            if must_be == constants.KIND_FILE:
                self._must_not_have_trailing_slash()
            raise

        if must_be is None:
            return True
        if must_be == constants.KIND_FILE:
            self._must_not_have_trailing_slash()
            if stat.S_ISREG(stats.st_mode):
                return True
        elif stat.S_ISDIR(stats.st_mode):
            return True
        raise WrongTypeError(self._path, must_be)

    async def exists_as_file(self) -> bool:
        return await self.exists(must_be=constants.KIND_FILE)

    async def exists_as_dir(self) -> bool:
        return await self.exists(must_be=constants.KIND_DIRECTORY)

    async def mkdir(self, *, recursive: bool = True, mode: int = 0o777) -> "Path":
        """Create the directory, with missing parents unless `recursive=False`."""
        await offload(get_fs().mkdir, self._path, recursive=recursive, mode=mode)
        return self

    async def copy(self, destination: PathLike, *, recursive: bool = False) -> "Path":
        target = Path(destination)
        await offload(get_fs().copy, self._path, target._path, recursive=recursive)
        return target

    async def rename(self, destination: PathLike) -> "Path":
        target = Path(destination)
        await offload(get_fs().rename, self._path, target._path)
        return target

    async def trash(self):
        """Move the path to the trash. The path is never glob-expanded."""
        await offload(get_fs().trash, self._path)

    @raise_not_found
    async def remove(self, *, recursive: bool = False, force: bool = False):
        """
        Remove the path. Directories need `recursive` unless empty.

        A missing path raises PathNotFoundError, or is ignored with `force`.
        """
        await offload(get_fs().remove, self._path, recursive=recursive)

    async def remove_force(self, *, recursive: bool = True, force: bool = True):
        return await self.remove(recursive=recursive, force=force)

    async def write(self, data: Union[str, bytes], *, encoding: Optional[str] = None) -> "Path":
        """Replace the file content, creating parent directories first."""
        fs = get_fs()
        parent = posix.dirname(self._path)
        if parent not in (constants.CURRENT_DIR, constants.SEP):
            await offload(fs.mkdir, parent, recursive=True)

        if isinstance(data, bytes):
            await offload(fs.write_bytes, self._path, data)
        elif isinstance(data, str):
            await offload(fs.write_text, self._path, data, encoding or get_settings().encoding)
        else:
            raise InvalidInputError(f"Can only write str or bytes, got {type(data).__name__}")
        return self

    async def write_structured(self, data: Any, *, fmt: Optional[str] = None) -> "Path":
        return await self.write(dump_structured(data, self._structured_format(fmt)))

    async def read_text(self, *, encoding: Optional[str] = None) -> str:
        return await offload(get_fs().read_text, self._path, encoding or get_settings().encoding)

    async def read_bytes(self) -> bytes:
        return await offload(get_fs().read_bytes, self._path)

    async def read_structured(self, *, fmt: Optional[str] = None) -> Any:
        return load_structured(await self.read_text(), self._structured_format(fmt))

    async def list_dir(
        self, *, with_types: bool = False, recursive: bool = False
    ) -> Union[List[str], List[DirEntry]]:
        """
        List children names, sorted. `with_types` returns DirEntry tuples,
        `recursive` descends and yields paths relative to this directory.
        """
        entries = await offload(get_fs().listdir, self._path, recursive=recursive)
        entries = sorted(entries, key=lambda entry: entry.name)
        if with_types:
            return entries
        return [entry.name for entry in entries]

    def _structured_format(self, fmt: Optional[str]) -> str:
        if fmt is None:
            ext = posix.extname(self._path).lower()
            return constants.FORMAT_BY_EXTENSION.get(ext, constants.FORMAT_JSON)
        if fmt not in constants.STRUCTURED_FORMATS:
            raise UnsupportedFormatError(
                f"Unsupported structured format '{fmt}', must be one of {constants.STRUCTURED_FORMATS}"
            )
        return fmt

    # --------------------
    #
    # Factories
    #
    # --------------------

    @classmethod
    async def make_temp_dir(cls, prefix: Optional[str] = None) -> "Path":
        """Create a temporary dir inside the global temp dir for the current user."""
        fs = get_fs()
        if prefix is None:
            prefix = get_settings().temp_prefix
        base = cls(fs.temp_root()).join(prefix)
        return cls(await offload(fs.make_temp_dir, base._path))

    @staticmethod
    def home_dir() -> "Path":
        # Import here to avoid circular dependency
        from .dirs import home_dir
        return home_dir()

    @staticmethod
    def standard_dirs():
        """XDG cache/config/data/state directories."""
        from .dirs import standard_dirs
        return standard_dirs()


def dump_structured(data: Any, fmt: str) -> str:
    if fmt == constants.FORMAT_YAML:
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    return json.dumps(data, indent=get_settings().json_indent, ensure_ascii=False) + "\n"


def load_structured(text: str, fmt: str) -> Any:
    if fmt == constants.FORMAT_YAML:
        return yaml.safe_load(text)
    return json.loads(text)
