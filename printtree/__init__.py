from printtree.base import children, childiter, haskeys, nodevalue, pairs
from printtree.charset import ASCII_CHARSET, UNICODE_CHARSET, TreeCharSet, branchwidth, charset
from printtree.keys import print_child_key, shouldprintkeys
from printtree.render import IOContext, PrintOptions, print_tree, printnode, repr_node, repr_tree
from printtree.tree import TensorTree, TreeStorage, tree
from printtree.utils import textwidth

__version__ = "0.3"
