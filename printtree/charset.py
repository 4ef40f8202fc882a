from dataclasses import dataclass, fields, replace as _replace
from typing import Union

from printtree.utils import textwidth


CharArg = Union[str, int]


@dataclass(frozen=True)
class TreeCharSet:
    """
    Set of characters (or strings) used to pretty-print tree branches.

    mid: "Forked" branch segment connecting to middle children.
    terminator: Final branch segment connecting to last child.
    skip: Vertical branch segment.
    dash: Horizontal branch segment printed to the right of `mid` and `terminator`.
    trunc: Used to indicate the subtree has been truncated at the maximum depth.
    pair: Printed between a child node and its key.
    """
    mid: str
    terminator: str
    skip: str
    dash: str
    trunc: str
    pair: str

    def __post_init__(self):
        # accept single characters and anything printable
        for f in fields(self):
            object.__setattr__(self, f.name, str(getattr(self, f.name)))

    @classmethod
    def from_base(cls, base: "TreeCharSet", **overrides: CharArg) -> "TreeCharSet":
        """ Create a new charset by modifying select fields of an existing one. """
        return _replace(base, **overrides)

    def replace(self, **overrides: CharArg) -> "TreeCharSet":
        return self.from_base(self, **overrides)


UNICODE_CHARSET = TreeCharSet("├", "└", "│", "─", "⋮", " ⇒ ")
ASCII_CHARSET = TreeCharSet("+", "\\", "|", "--", "...", " => ")

_PRESETS = {
    "unicode": UNICODE_CHARSET,
    "ascii": ASCII_CHARSET,
}


def charset(name: str = "unicode") -> TreeCharSet:
    """
    Returns one of the default tree character sets.

    :param name: Either "unicode" (default) or "ascii". Case sensitive.
    :return: The preset.
    """
    try:
        return _PRESETS[name]
    except (KeyError, TypeError):
        raise ValueError(f"unrecognized default TreeCharSet name: {name!r}") from None


def branchwidth(cs: TreeCharSet) -> int:
    """ Display width of a branch (`mid` followed by `dash`). """
    return textwidth(cs.mid) + textwidth(cs.dash)
