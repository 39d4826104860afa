from __future__ import annotations

import logging
from typing import Generic, TypeVar, Optional, Tuple, Type

T = TypeVar("T")

logger = logging.getLogger(__name__)


class TreeInvariantError(AssertionError):
    """Raised when a structural invariant of a tree turns out to be broken.

    This always points at a defect in the tree code itself, never at bad
    input from the caller, and is not caught anywhere in this package.
    """


def _height(node: Optional[TreeNode]) -> int:
    if node is None:
        return 0
    return node._height


def _balance_factor(node: Optional[TreeNode]) -> int:
    if node is None:
        return 0
    return _height(node._right) - _height(node._left)


def take_smallest(
    node: Optional[TreeNode[T]],
) -> Tuple[Optional[TreeNode[T]], TreeNode[T]]:
    """Detach the node holding the smallest value of a subtree.

    The detached node's right child is spliced into the gap it leaves behind,
    and every node on the path down to it is rebalanced on the way back up.

    Returns a tuple containing:
        - The remaining subtree (possibly with a new root, possibly empty)
        - The detached node, with no children
    """
    if node is None:
        raise TreeInvariantError("cannot take the smallest node of an empty subtree")

    if node._left is None:
        rest = node._right
        node._right = None
        node._update_height()
        return (rest, node)

    node._left, smallest = take_smallest(node._left)
    return (node._rebalance(), smallest)


class TreeNode(Generic[T]):
    def __init__(self, value: T):
        self.value: T = value
        self._left: Optional[TreeNode[T]] = None
        self._right: Optional[TreeNode[T]] = None
        self._height: int = 1

    @property
    def left(self) -> Optional[TreeNode[T]]:
        """This node's left child, if any."""
        return self._left

    @property
    def right(self) -> Optional[TreeNode[T]]:
        """This node's right child, if any."""
        return self._right

    @property
    def height(self) -> int:
        """Height of the subtree rooted at this node (a leaf has height 1)."""
        return self._height

    @property
    def balance(self) -> int:
        """Right subtree height minus left subtree height."""
        return _balance_factor(self)

    def _update_height(self):
        self._height = 1 + max(_height(self._left), _height(self._right))

    def _rotate_left(self) -> TreeNode[T]:
        pivot = self._right
        if pivot is None:
            return self

        self._right = pivot._left
        pivot._left = self

        # self is now below pivot, so it has to be refreshed first
        self._update_height()
        pivot._update_height()
        return pivot

    def _rotate_right(self) -> TreeNode[T]:
        pivot = self._left
        if pivot is None:
            return self

        self._left = pivot._right
        pivot._right = self

        self._update_height()
        pivot._update_height()
        return pivot

    def _contains(self, value: T) -> bool:
        if value == self.value:
            return True
        elif value < self.value:
            if self._left is not None:
                return self._left._contains(value)
        else:
            if self._right is not None:
                return self._right._contains(value)

        return False

    def _insert(self, value: T) -> Tuple[bool, TreeNode[T]]:
        if value == self.value:
            return (False, self)

        if value < self.value:
            if self._left is None:
                self._left = self.__class__(value)
                inserted = True
            else:
                inserted, self._left = self._left._insert(value)
        else:
            if self._right is None:
                self._right = self.__class__(value)
                inserted = True
            else:
                inserted, self._right = self._right._insert(value)

        if not inserted:
            return (False, self)
        return (True, self._rebalance())

    def _delete(self, value: T) -> Tuple[bool, Optional[TreeNode[T]]]:
        if value == self.value:
            return (True, self._remove())

        if value < self.value:
            if self._left is None:
                return (False, self)
            deleted, self._left = self._left._delete(value)
        else:
            if self._right is None:
                return (False, self)
            deleted, self._right = self._right._delete(value)

        if not deleted:
            return (False, self)
        return (True, self._rebalance())

    def _remove(self) -> Optional[TreeNode[T]]:
        """Detach this node from its children.

        Returns the subtree that should take this node's place.
        """
        if self._left is not None and self._right is not None:
            # The in-order successor takes over this node's position.
            rest, successor = take_smallest(self._right)
            successor._left = self._left
            successor._right = rest
            replacement = successor._rebalance()
        elif self._left is not None:
            replacement = self._left
        else:
            replacement = self._right

        self._left = None
        self._right = None
        return replacement

    def _print_recursive(self, level: int) -> str:
        ret = ""
        if self._left is not None:
            ret = self._left._print_recursive(level + 1)

        ret += ("    " * level) + self._print_node() + "\n"

        if self._right is not None:
            ret += self._right._print_recursive(level + 1)

        return ret

    def __repr__(self) -> str:
        return "Node(value={!r}, left={!r}, right={!r})".format(
            self.value, self._left, self._right
        )

    # methods for subclasses to override:

    def _print_node(self) -> str:
        return str(self.value)

    def _rebalance(self) -> TreeNode[T]:
        self._update_height()
        return self


class Tree(Generic[T]):
    """An ordered set of unique values stored in a binary search tree.

    The base class never rebalances; subclasses pass in a node class whose
    `_rebalance` hook restores whatever shape invariant they maintain.
    """

    def __init__(self, node_class: Type[TreeNode] = TreeNode):
        self._node_cls = node_class
        self._root: Optional[TreeNode[T]] = None
        self._len: int = 0

    @property
    def root(self) -> Optional[TreeNode[T]]:
        """The root node of this tree, if any."""
        return self._root

    def insert(self, value: T):
        """Add a value to the tree. Inserting a value already present does
        nothing.
        """
        if self._root is None:
            self._root = self._node_cls(value)
            self._len = 1
            return

        inserted, self._root = self._root._insert(value)
        if inserted:
            self._len += 1

    def delete(self, value: T):
        """Remove a value from the tree. Deleting a value that is not present
        does nothing.
        """
        if self._root is None:
            return

        deleted, self._root = self._root._delete(value)
        if deleted:
            self._len -= 1

    def contains(self, value: T) -> bool:
        if self._root is None:
            return False
        return self._root._contains(value)

    def rotate_left(self):
        """Rotate the whole tree left around its root.

        This bypasses rebalancing entirely and may leave the tree unbalanced.
        Does nothing if the root has no right child.
        """
        if self._root is not None:
            logger.debug("explicit left rotation at root %r", self._root.value)
            self._root = self._root._rotate_left()

    def rotate_right(self):
        """Rotate the whole tree right around its root.

        This bypasses rebalancing entirely and may leave the tree unbalanced.
        Does nothing if the root has no left child.
        """
        if self._root is not None:
            logger.debug("explicit right rotation at root %r", self._root.value)
            self._root = self._root._rotate_right()

    def height(self) -> int:
        return _height(self._root)

    def print(self) -> str:
        if self._root is not None:
            return self._root._print_recursive(0)
        else:
            return "<empty tree>"

    def __contains__(self, value: T) -> bool:
        return self.contains(value)

    def __len__(self) -> int:
        return self._len

    def __repr__(self) -> str:
        return "{}({!r})".format(self.__class__.__name__, self._root)
