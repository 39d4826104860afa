from . import base
from . import avl

from .base import Tree, TreeNode, TreeInvariantError
from .avl import AVLTree, AVLNode

__all__ = [
    "Tree",
    "TreeNode",
    "TreeInvariantError",
    "AVLTree",
    "AVLNode",
]
