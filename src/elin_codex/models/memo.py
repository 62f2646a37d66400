"""
Per-instance memoization for derived entity values.
"""

import functools
from typing import Any, Callable, TypeVar

F = TypeVar("F", bound=Callable[..., Any])


def memoized(method: F) -> F:
    """Cache a method's result on the instance, keyed by name and arguments.

    The owning class must define a ``_memo`` dict. Arguments must be hashable.
    Each instance has its own cache, so sharing one instance across threads
    needs external locking; distinct instances never contend.
    """
    name = method.__name__

    @functools.wraps(method)
    def wrapper(self, *args):
        key = (name, *args)
        try:
            return self._memo[key]
        except KeyError:
            pass
        value = method(self, *args)
        self._memo[key] = value
        return value

    return wrapper  # type: ignore[return-value]
