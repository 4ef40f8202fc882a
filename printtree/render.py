import dataclasses
import io as _io
import itertools
import logging
import reprlib
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Optional, TextIO, Union

import numpy as np
import torch

from printtree.base import children, childiter, haskeys, nodevalue, pairs
from printtree.charset import UNICODE_CHARSET, TreeCharSet, charset as _charset
from printtree.keys import print_child_key, shouldprintkeys
from printtree.utils import iodispatch, textwidth

logger = logging.getLogger(__name__)


NodeRenderer = Callable[[Any, Any], None]

_EMPTY = object()


def _properties(obj) -> dict:
    if isinstance(obj, IOContext):
        return obj.properties
    if isinstance(obj, Mapping):
        return dict(obj)
    return {}  # a plain stream carries no display properties


class IOContext:
    """
    A stream wrapper which carries display properties to node renderers.

    Writes are passed through to the wrapped stream. Properties of a wrapped IOContext
    or of `context` are inherited, keyword arguments take precedence.

    Recognized properties:
        limit: Truncate long values (default True).
        compact: Print floats with 6 significant digits (default True).
        maxstring, maxlist, maxdict, ...: Limits of `reprlib.Repr` used when `limit` is set.
    """

    def __init__(self, io, context=None, **properties):
        inherited = {}
        if isinstance(io, IOContext):
            inherited.update(io.properties)
            io = io.io

        inherited.update(_properties(context))
        inherited.update(properties)

        self.io = io
        self.properties = inherited

    def write(self, s: str) -> int:
        return self.io.write(s)

    def get(self, key: str, default: Any = None) -> Any:
        return self.properties.get(key, default)


def _display_repr(value, io) -> str:
    """ Compact and size limited representation of a value. """
    if isinstance(value, float) and _properties(io).get("compact", True):
        short = format(value, ".6g")
        # keep the shortest repr if nothing was lost, e.g. 1.0 instead of 1
        return repr(value) if float(short) == value else short

    if not _properties(io).get("limit", True):
        return repr(value)

    r = reprlib.Repr()
    for key, limit in _properties(io).items():
        if key.startswith("max") and hasattr(r, key):
            setattr(r, key, limit)
    return r.repr(value)


@iodispatch
def printnode(io, node):
    """
    Prints a compact representation of a single node. By default, this prints `nodevalue(node)`.

    This can be extended for custom types with `printnode.register(MyType)` and controls
    how nodes are shown in `print_tree`.
    """
    io.write(_display_repr(nodevalue(node), io))


@printnode.register(list)
@printnode.register(tuple)
@printnode.register(range)
@printnode.register(set)
@printnode.register(frozenset)
@printnode.register(Mapping)
def _(io, node):
    # containers are described by their children
    io.write(type(node).__name__)


@printnode.register(np.generic)
def _(io, node):
    io.write(_display_repr(node.item(), io))


@printnode.register(np.ndarray)
@printnode.register(torch.Tensor)
def _(io, node):
    if node.ndim == 0:
        io.write(_display_repr(node.item(), io))
    else:
        io.write(f"{type(node).__name__}(shape={tuple(node.shape)}, dtype={node.dtype})")


def repr_node(node, context=None, printnode: NodeRenderer = printnode) -> str:
    """
    Get the string representation of a node using `printnode`. This works analogously to `repr`.

    :param node: The node.
    :param context: An IOContext or a mapping whose properties are used for the stream
        passed to `printnode`.
    :param printnode: The renderer.
    """
    buf = _io.StringIO()
    out = buf if context is None else IOContext(buf, context)
    printnode(out, node)
    return buf.getvalue()


@dataclass(frozen=True)
class PrintOptions:
    """
    Options of `print_tree`.

    maxdepth: Truncate printing of subtrees at this depth.
    indicate_truncation: Print the truncation character(s) beneath truncated nodes.
    charset: TreeCharSet (or the name of a preset) used to print branches.
    printkeys: Whether to print keys of child nodes. None decides on a node-by-node basis
        using `shouldprintkeys`.
    """
    maxdepth: int = 5
    indicate_truncation: bool = True
    charset: TreeCharSet = UNICODE_CHARSET
    printkeys: Optional[bool] = None

    def __post_init__(self):
        if isinstance(self.maxdepth, bool) or not isinstance(self.maxdepth, int) or self.maxdepth < 0:
            raise ValueError(f"maxdepth must be a non-negative integer and not {self.maxdepth!r}.")

        if isinstance(self.charset, str):
            object.__setattr__(self, 'charset', _charset(self.charset))
        elif not isinstance(self.charset, TreeCharSet):
            raise TypeError(f"charset must be a TreeCharSet and not {type(self.charset).__name__}.")

        if self.printkeys not in (None, True, False):
            raise ValueError(f"printkeys must be None, True or False and not {self.printkeys!r}.")


def _print_tree(printnode: NodeRenderer, io, node, options: PrintOptions, depth: int, prefix: str):
    cs = options.charset

    # copy node representation to output, prepending prefix to each line
    text = repr_node(node, context=io, printnode=printnode)
    for i, line in enumerate(text.split("\n")):
        if i != 0:
            io.write(prefix)
        io.write(line)
        io.write("\n")

    c = children(node)

    it = iter(childiter(c))
    first = next(it, _EMPTY)
    if first is _EMPTY:
        return

    if depth >= options.maxdepth:
        logger.debug("Truncating children of %s at depth %d", type(node).__name__, depth)
        if options.indicate_truncation:
            io.write(prefix + cs.trunc + "\n")
            io.write(prefix + "\n")
        return

    # collections with keys can be iterated again
    this_printkeys = haskeys(c) and (shouldprintkeys(c) if options.printkeys is None else options.printkeys)
    if this_printkeys:
        items = list(pairs(c))
    else:
        items = [(None, child) for child in itertools.chain([first], it)]

    for i, (child_key, child) in enumerate(items):
        child_prefix = prefix
        io.write(prefix)

        if i == len(items) - 1:
            io.write(cs.terminator)
            child_prefix += " " * (textwidth(cs.skip) + textwidth(cs.dash) + 1)
        else:
            io.write(cs.mid)
            child_prefix += cs.skip + " " * (textwidth(cs.dash) + 1)

        io.write(cs.dash + " ")

        if this_printkeys:
            buf = _io.StringIO()
            print_child_key(IOContext(buf, io), child_key)
            key_str = buf.getvalue()

            io.write(key_str + cs.pair)
            child_prefix += " " * (textwidth(key_str) + textwidth(cs.pair))

        _print_tree(printnode, io, child, options, depth + 1, child_prefix)


def print_tree(
        tree, io: Optional[Union[TextIO, IOContext]] = None, node_renderer: Optional[NodeRenderer] = None,
        options: Optional[PrintOptions] = None, **kwargs,
):
    """
    Print a text representation of `tree` to the given `io` object.

    >>> print_tree([range(1, 4), "foo", [[[4, 5], 6, 7], 8]], maxdepth=2)
    list
    ├─ range
    │  ├─ 1
    │  ├─ 2
    │  └─ 3
    ├─ 'foo'
    └─ list
       ├─ list
       │  ⋮
       │  
       └─ 8

    :param tree: Tree to print.
    :param io: Stream to write to, defaults to `sys.stdout`.
    :param node_renderer: Custom implementation of `printnode` with the signature `f(io, node)`.
    :param options: PrintOptions, keyword arguments (maxdepth, indicate_truncation, charset,
        printkeys) override single fields.
    """
    if io is None:
        io = sys.stdout

    if node_renderer is None:
        node_renderer = printnode

    if options is None:
        options = PrintOptions(**kwargs)
    elif kwargs:
        options = dataclasses.replace(options, **kwargs)

    logger.debug("Printing tree of %s with %s", type(tree).__name__, options)
    _print_tree(node_renderer, io, tree, options, depth=0, prefix="")


def repr_tree(tree, context=None, node_renderer: Optional[NodeRenderer] = None, **kwargs) -> str:
    """
    Get the string result of calling `print_tree` with the supplied arguments.

    :param context: An IOContext or mapping of display properties, see `repr_node`.
    """
    buf = _io.StringIO()
    out = buf if context is None else IOContext(buf, context)
    print_tree(tree, out, node_renderer, **kwargs)
    return buf.getvalue()
