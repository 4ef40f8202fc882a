import functools
import types
from collections.abc import Sequence

import numpy as np
import torch

from printtree.base import haskeys
from printtree.utils import iodispatch


@functools.singledispatch
def shouldprintkeys(children) -> bool:
    """
    Whether a collection of children should be printed with its keys by default.

    The base behavior is to print keys for all collections which support key lookup,
    with the exception of sequences (lists, tuples, ranges). Arrays print their keys
    only when they have more than one dimension.

    Register an implementation for your own collection types to change the default.
    """
    return haskeys(children)


@shouldprintkeys.register(Sequence)
@shouldprintkeys.register(types.GeneratorType)
def _(children):
    return False


@shouldprintkeys.register(np.ndarray)
@shouldprintkeys.register(torch.Tensor)
def _(children):
    return children.ndim > 1


def _is_position(index) -> bool:
    if isinstance(index, torch.Tensor):
        return index.ndim == 0 and not (index.is_floating_point() or index.is_complex())
    return isinstance(index, (int, np.integer)) and not isinstance(index, bool)


@iodispatch
def print_child_key(io, key):
    """ Prints the key for a child node. """
    io.write(repr(key))


@print_child_key.register(tuple)
def _(io, key):
    if key and all(_is_position(i) for i in key):
        # structured index, print as coordinates
        key = tuple(int(i) for i in key)
    io.write(repr(key))


@print_child_key.register(np.integer)
def _(io, key):
    io.write(repr(int(key)))
