from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Union

import numpy as np
import torch

from printtree.base import children, nodevalue
from printtree.render import print_tree, printnode, repr_tree
from printtree.utils import to_torch, validate_index


# Define a type alias for the content of the node sequence
LabelType = Any
TensorType = Union[Sequence[int], np.ndarray, torch.Tensor]


@dataclass(frozen=True)
class TreeStorage:
    """
    Stores a tree with data. The structure is given by the parent index of every
    node in pre-order, the root has parent -1.
    """

    parents: TensorType = None

    # other sequence types will be converted to tensors if possible.
    node_data: Union[torch.Tensor, Sequence[LabelType]] = None

    def __post_init__(self):
        if self.parents is None:
            raise ValueError("Parents must be passed")

        parents: torch.Tensor = to_torch(self.parents).long()

        if parents.ndim != 1 or parents.numel() == 0:
            raise ValueError(f"Parents must be a non-empty 1d sequence and not of shape {tuple(parents.shape)}.")

        if parents[0] != -1:
            raise ValueError("Parents array seems to have wrong format.")

        # in pre-order every parent comes before its children
        if (parents[1:] >= torch.arange(1, parents.numel())).any() or (parents[1:] < 0).any():
            raise ValueError("Parents array is not in pre-order.")

        # node_data may be nothing, in that case simply enumerate the nodes
        if self.node_data is None:
            node_data = torch.arange(parents.numel())
        else:
            # node_data is a sequence of strings (tensor incompatible)
            try:
                node_data = to_torch(self.node_data)
            except (ValueError, TypeError, RuntimeError):
                node_data: List[LabelType] = list(self.node_data)

        if len(node_data) != parents.numel():
            raise ValueError(f"All arrays need to be of same length and not ({parents.numel()}, {len(node_data)}).")

        object.__setattr__(self, 'parents', parents)
        object.__setattr__(self, 'node_data', node_data)


def tree(parents: TensorType, node_data: Optional[Sequence[LabelType]] = None):
    """ Constructor to build a tree. """
    return TensorTree.from_array(parents=parents, node_data=node_data)


class TensorTree:
    """
    A view of a single node of a tree stored in a TreeStorage. Views are cheap,
    every view shares the storage of the whole tree.
    """

    @classmethod
    def from_array(cls, parents: TensorType, node_data: Optional[Sequence[LabelType]] = None):
        """ Obtain a tree from a parents array. An additional node_data list is used for rendering. """
        return cls(TreeStorage(parents, node_data))

    def __init__(self, data: TreeStorage, node_idx: int = 0):
        self.data = data
        self.node_idx = node_idx

    def __len__(self):
        """ The number of nodes in the whole tree. """
        return self.data.parents.numel()

    def __str__(self):
        return self.pformat()

    def __repr__(self):
        return f"TensorTree(node_idx={self.node_idx}, nodes={len(self)})"

    @validate_index(allow_none=True)
    def __getitem__(self, node_idx: Union[int, torch.Tensor, None]) -> "TensorTree":
        """ Will return a view of the node at node_idx, None returns the root. """
        if node_idx is None:
            return TensorTree(self.data)

        return TensorTree(self.data, int(node_idx))

    def get_node_data(self) -> Any:
        return self.data.node_data[self.node_idx]

    def get_parent(self) -> Optional[int]:
        """ Returns the parent idx for this node or None if it is the root. """
        if self.node_idx == 0:
            return

        return int(self.data.parents[self.node_idx])

    def children_indices(self) -> torch.Tensor:
        return (self.data.parents == self.node_idx).nonzero(as_tuple=False).squeeze(-1)

    def children(self) -> List["TensorTree"]:
        """ Views of the children of this node in index order. """
        return [TensorTree(self.data, int(idx)) for idx in self.children_indices()]

    def is_leaf(self) -> bool:
        return not (self.data.parents == self.node_idx).any()

    def pformat(self, **kwargs) -> str:
        """
        Pretty prints the subtree below this node. Takes the same keyword arguments as `print_tree`.
        """
        return repr_tree(self, **kwargs)

    def pprint(self, **kwargs):
        """ See pformat for description of arguments."""
        print_tree(self, **kwargs)


@children.register(TensorTree)
def _(node):
    return node.children()


@nodevalue.register(TensorTree)
def _(node):
    return node.get_node_data()


@printnode.register(TensorTree)
def _(io, node):
    token = node.get_node_data()
    if isinstance(token, torch.Tensor):
        token = token.item()

    io.write(f"{node.node_idx}. {token}")
