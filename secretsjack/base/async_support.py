"""
Async support for Secretsjack.

boto3 clients are synchronous. ``async_wrap`` turns a blocking client call
into an awaitable by running it in a worker thread via
:func:`asyncio.to_thread`, so event-loop code can await a secret without
stalling other tasks. The canonical implementations stay synchronous.

Usage::

    manager = AWSSecretsManager({"region_name": "eu-west-1"})
    password = await manager.aget_secret("db/password", parse=False)
"""

from __future__ import annotations

import asyncio
import functools
import inspect
from typing import Any, Callable, Coroutine, TypeVar

T = TypeVar("T")


def async_wrap(
    fn: Callable[..., T],
) -> Callable[..., Coroutine[Any, Any, T]]:
    """Return an async version of *fn* that runs it in a thread.

    The wrapper preserves the original function's name and docstring.

    Args:
        fn: A synchronous callable to wrap.

    Returns:
        An async callable with the same parameters and return type.
    """

    @functools.wraps(fn)
    async def _wrapper(*args: Any, **kwargs: Any) -> T:
        return await asyncio.to_thread(fn, *args, **kwargs)

    return _wrapper


class AsyncMixin:
    """Mixin that auto-generates ``a<method>`` async variants.

    Every public, synchronous method defined on the subclass gains an
    awaitable twin, created once at class definition time. Existing
    ``a<method>`` attributes are left alone.

    Example::

        class AWSSecretsManager(AsyncMixin):
            def get_secret(self, name: str) -> Any: ...
            # => await self.aget_secret(name) is now available
    """

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        for name, attr in list(vars(cls).items()):
            if name.startswith("_") or isinstance(attr, (staticmethod, classmethod, property)):
                continue
            if inspect.isfunction(attr) and not inspect.iscoroutinefunction(attr):
                async_name = f"a{name}"
                if not hasattr(cls, async_name):
                    setattr(cls, async_name, async_wrap(attr))
