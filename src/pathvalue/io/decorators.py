"""
Helpers that sit between Path operations and filesystem backends.

- Run blocking backend primitives off the event loop (offload)
- Translate a missing path into the library's not-found error (raise_not_found)
"""

import asyncio
import errno
import functools
import logging
import os
from typing import Any, Callable, TypeVar

from ..exceptions import PathNotFoundError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def offload(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """
    Await a blocking call on the loop's default executor.

    The calling task suspends until the primitive returns; exceptions raised
    by the primitive propagate unchanged.
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, functools.partial(func, *args, **kwargs))


def raise_not_found(func):
    """
    Decorator for Path coroutine methods that require the path to exist.

    A FileNotFoundError from the backend is re-raised as PathNotFoundError,
    which is itself a FileNotFoundError carrying ENOENT and the filename.
    When the call passed `force=True` a missing path is not an error and
    None is returned instead.

    Usage:

        @raise_not_found
        async def remove(self, *, force: bool = False):
            ...
    """
    @functools.wraps(func)
    async def wrapper(self, *args, **kwargs):
        try:
            return await func(self, *args, **kwargs)
        except PathNotFoundError:
            raise
        except FileNotFoundError as e:
            if kwargs.get("force"):
                logger.debug(f"Ignoring missing path in {func.__name__}: {self}")
                return None
            filename = e.filename if e.filename is not None else str(self)
            raise PathNotFoundError(
                e.errno or errno.ENOENT,
                e.strerror or os.strerror(errno.ENOENT),
                filename,
            ) from e
    return wrapper
