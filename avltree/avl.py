from __future__ import annotations

import logging
from typing import TypeVar

from .base import Tree, TreeNode, TreeInvariantError

T = TypeVar("T")

logger = logging.getLogger(__name__)


class AVLTree(Tree):
    def __init__(self):
        super().__init__(AVLNode)


class AVLNode(TreeNode):
    def _rebalance(self) -> AVLNode[T]:
        self._update_height()
        balance = self.balance

        if balance > 2 or balance < -2:
            raise TreeInvariantError(
                "node {!r} drifted out of balance by more than one step (balance {})".format(
                    self.value, balance
                )
            )

        if balance > 1:
            # Right subtree is too tall.
            child: AVLNode[T] = self._right
            child_bal = child.balance
            _check_child(child, child_bal)

            if child_bal < 0:
                logger.debug("right-left imbalance at %r", self.value)
                self._right = child._rotate_right()
            else:
                logger.debug("right-right imbalance at %r", self.value)
            new_root = self._rotate_left()
        elif balance < -1:
            # Left subtree is too tall.
            child = self._left
            child_bal = child.balance
            _check_child(child, child_bal)

            if child_bal > 0:
                logger.debug("left-right imbalance at %r", self.value)
                self._left = child._rotate_left()
            else:
                logger.debug("left-left imbalance at %r", self.value)
            new_root = self._rotate_right()
        else:
            new_root = self

        new_bal = new_root.balance
        if new_bal > 1 or new_bal < -1:
            raise TreeInvariantError(
                "subtree rooted at {!r} still unbalanced after rebalancing (balance {})".format(
                    new_root.value, new_bal
                )
            )
        return new_root

    def _print_node(self) -> str:
        return "{}: {:2d}".format(self.value, self.balance)


def _check_child(child: AVLNode, child_bal: int):
    if child_bal > 1 or child_bal < -1:
        raise TreeInvariantError(
            "child {!r} of an unbalanced node is itself unbalanced (balance {})".format(
                child.value, child_bal
            )
        )
