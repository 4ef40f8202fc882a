import functools
import unicodedata
from typing import Any, Sequence

import numpy as np
import torch


def validate_index(_func=None, allow_none: bool = False):
    """ Should be only used inside TensorTree and on functions that receive
    a node_idx as the first argument after self.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(self, node_idx, *args, **kwargs):

            if node_idx is None:
                if not allow_none:
                    raise IndexError(f"Index {node_idx} is not allowed in this method.")
            else:
                if node_idx < 0 or node_idx >= len(self):
                    raise IndexError(
                        f"Index {node_idx} is out of bounds for this tree with {len(self)} nodes."
                    )

            return func(self, node_idx, *args, **kwargs)
        return wrapper

    if _func is None:
        return decorator
    else:
        return decorator(_func)


def to_torch(some_sequence: Sequence[Any]) -> torch.Tensor:
    if isinstance(some_sequence, torch.Tensor):
        return some_sequence
    elif isinstance(some_sequence, np.ndarray):
        return torch.from_numpy(some_sequence)
    else:
        return torch.tensor(some_sequence)  # may raise additional errors


def iodispatch(func):
    """
    Like `functools.singledispatch`, but dispatches on the type of the second argument.

    Used for functions with an `(io, obj)` signature, which write `obj` to `io`.
    """
    dispatcher = functools.singledispatch(func)

    @functools.wraps(func)
    def wrapper(io, obj, *args, **kwargs):
        return dispatcher.dispatch(obj.__class__)(io, obj, *args, **kwargs)

    wrapper.register = dispatcher.register
    wrapper.dispatch = dispatcher.dispatch
    wrapper.registry = dispatcher.registry
    return wrapper


def charwidth(char: str) -> int:
    """ Number of terminal columns a single character occupies. """
    if unicodedata.combining(char) or unicodedata.category(char) in ("Mn", "Me", "Cf"):
        return 0
    if unicodedata.east_asian_width(char) in ("W", "F"):
        return 2
    return 1


def textwidth(text: str) -> int:
    """
    Display width of a string in terminal columns.

    Wide east asian characters count twice, combining marks and format characters
    not at all. Used for every alignment computation of the tree printer.
    """
    return sum(charwidth(c) for c in text)
