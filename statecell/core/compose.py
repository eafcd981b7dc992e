"""
Right-to-left function composition.
"""

from functools import reduce
from typing import Any, Callable


def _identity(arg: Any) -> Any:
    return arg


def compose(*funcs: Callable[..., Any]) -> Callable[..., Any]:
    """
    Compose single-argument functions from right to left.

    compose(f, g, h)(x) is f(g(h(x))). The rightmost function may take any
    arguments. With no functions the identity is returned; with one, that
    function is returned unchanged.

    Raises:
        TypeError: If any argument is not callable
    """
    for func in funcs:
        if not callable(func):
            raise TypeError(f"compose() expects callables, got {type(func).__name__}")

    if not funcs:
        return _identity
    if len(funcs) == 1:
        return funcs[0]

    def _pair(outer: Callable[..., Any], inner: Callable[..., Any]) -> Callable[..., Any]:
        return lambda *args, **kwargs: outer(inner(*args, **kwargs))

    return reduce(_pair, funcs)
