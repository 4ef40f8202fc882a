"""
The node protocol used by the tree printer.

Every function here is a `functools.singledispatch` function. A host application
teaches the printer about its own types by registering implementations, e.g.

>>> @children.register(MyNode)
... def _(node):
...     return node.kids

Nothing in this module knows how a tree is drawn.
"""
import functools
from collections.abc import Mapping, Sequence
from typing import Any, Iterable, Iterator, Tuple

import numpy as np
import torch


@functools.singledispatch
def children(node) -> Iterable:
    """
    Returns the children of a node. Every value is a leaf unless registered otherwise.

    The returned collection may be a sequence, a mapping (keys are the child labels),
    an array or any other iterable.
    """
    return ()


@children.register(list)
@children.register(tuple)
@children.register(range)
@children.register(set)
@children.register(frozenset)
@children.register(Mapping)
def _(node):
    return node


@children.register(np.ndarray)
@children.register(torch.Tensor)
def _(node):
    # 0-d arrays are scalars
    if node.ndim == 0:
        return ()
    return node


@functools.singledispatch
def nodevalue(node) -> Any:
    """ The value of a node which is displayed by the default renderer. """
    return node


@functools.singledispatch
def haskeys(children) -> bool:
    """ Whether a collection of children supports key lookup at all. """
    return False


@haskeys.register(Sequence)
@haskeys.register(Mapping)
@haskeys.register(np.ndarray)
@haskeys.register(torch.Tensor)
def _(children):
    return True


@functools.singledispatch
def pairs(children) -> Iterator[Tuple[Any, Any]]:
    """ Iterates over (key, child) tuples of a collection of children. """
    raise TypeError(f"Children of type {type(children).__name__} have no keys.")


@pairs.register(Mapping)
def _(children):
    return iter(children.items())


@pairs.register(Sequence)
def _(children):
    return enumerate(children)


@pairs.register(np.ndarray)
def _(children):
    if children.ndim == 1:
        return enumerate(children)
    return np.ndenumerate(children)


@pairs.register(torch.Tensor)
def _(children):
    if children.ndim == 1:
        return enumerate(children)
    return zip(np.ndindex(*children.shape), children.reshape(-1))


@functools.singledispatch
def childiter(children) -> Iterator:
    """ Iterates over a collection of children without their keys. """
    return iter(children)


@childiter.register(Mapping)
def _(children):
    return iter(children.values())


@childiter.register(np.ndarray)
def _(children):
    return iter(children.flat)


@childiter.register(torch.Tensor)
def _(children):
    return iter(children.reshape(-1))
