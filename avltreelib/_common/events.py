"""Rotation and progress events emitted by the AVL engines.

Rotation events are handed to the rotation observer before a rotation
rewires any pointers. Progress events are advisory text for status bars;
dropping them changes nothing about the resulting tree.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .node import AVLNode


class RotationDirection(Enum):
    """Direction of a single rotation."""
    LEFT = "left"
    RIGHT = "right"


class ImbalanceCase(Enum):
    """The four imbalance patterns an AVL rotation resolves."""
    LEFT_LEFT = "LL"        # Single right rotation
    RIGHT_RIGHT = "RR"      # Single left rotation
    LEFT_RIGHT = "LR"       # Left on the child, then right
    RIGHT_LEFT = "RL"       # Right on the child, then left

    @property
    def is_double(self) -> bool:
        """True for the cases that need two rotations."""
        return self in (ImbalanceCase.LEFT_RIGHT, ImbalanceCase.RIGHT_LEFT)

    @property
    def label(self) -> str:
        """Human-readable name, e.g. ``Left-Right``."""
        return {
            ImbalanceCase.LEFT_LEFT: "Left-Left",
            ImbalanceCase.RIGHT_RIGHT: "Right-Right",
            ImbalanceCase.LEFT_RIGHT: "Left-Right",
            ImbalanceCase.RIGHT_LEFT: "Right-Left",
        }[self]


class ProgressKind(Enum):
    """Milestones at which the engine reports progress."""
    IMBALANCE_DETECTED = "imbalance_detected"
    CASE_CLASSIFIED = "case_classified"
    ROTATION_CHOSEN = "rotation_chosen"
    DUPLICATE_IGNORED = "duplicate_ignored"
    VALUE_NOT_FOUND = "value_not_found"
    TREE_REBUILT = "tree_rebuilt"


@dataclass(frozen=True)
class RotationEvent:
    """A rotation about to happen.

    ``old_root`` is the current subtree root and ``new_root`` the child
    that will replace it. Both still hold their pre-rotation links.
    """
    direction: RotationDirection
    old_root: AVLNode
    new_root: AVLNode

    @property
    def moving_subtree(self) -> Optional[AVLNode]:
        """The T2 subtree that changes parent during the rotation."""
        if self.direction is RotationDirection.RIGHT:
            return self.new_root.right
        return self.new_root.left


@dataclass(frozen=True)
class ProgressEvent:
    """Advisory status message at an algorithmic milestone."""
    kind: ProgressKind
    message: str
    value: Any = None
    balance: Optional[int] = None
    case: Optional[ImbalanceCase] = None

    def __str__(self) -> str:
        return self.message


def classify_insert(balance: int, value: Any, node: AVLNode) -> Optional[ImbalanceCase]:
    """Classify an imbalance after inserting ``value`` beneath ``node``.

    The inserted value is compared against the heavy child to tell single
    from double rotation cases.

    Returns:
        The matching case, or None when ``node`` is balanced
    """
    if balance > 1:
        if value < node.left.value:
            return ImbalanceCase.LEFT_LEFT
        if value > node.left.value:
            return ImbalanceCase.LEFT_RIGHT
    elif balance < -1:
        if value > node.right.value:
            return ImbalanceCase.RIGHT_RIGHT
        if value < node.right.value:
            return ImbalanceCase.RIGHT_LEFT
    return None


def classify_delete(balance: int, left_balance: int, right_balance: int) -> Optional[ImbalanceCase]:
    """Classify an imbalance after a deletion.

    Deletion has no inserted value to compare, so the heavy child's own
    balance factor decides between single and double rotation.

    Returns:
        The matching case, or None when the node is balanced
    """
    if balance > 1:
        return ImbalanceCase.LEFT_LEFT if left_balance >= 0 else ImbalanceCase.LEFT_RIGHT
    if balance < -1:
        return ImbalanceCase.RIGHT_RIGHT if right_balance <= 0 else ImbalanceCase.RIGHT_LEFT
    return None


# Message builders shared by the sync and async engines

def imbalance_detected(node: AVLNode, balance: int) -> ProgressEvent:
    return ProgressEvent(
        ProgressKind.IMBALANCE_DETECTED,
        f"Node {node.value} is unbalanced with balance factor {balance}",
        value=node.value,
        balance=balance,
    )


def case_classified(node: AVLNode, balance: int, case: ImbalanceCase,
                    inserted: Any = None) -> ProgressEvent:
    if inserted is not None:
        child = node.left if balance > 1 else node.right
        relation = "<" if inserted < child.value else ">"
        detail = f" (BF = {balance}, inserted {inserted} {relation} {child.value})"
    else:
        detail = f" (BF = {balance})"
    return ProgressEvent(
        ProgressKind.CASE_CLASSIFIED,
        f"{case.label} case detected at node {node.value}{detail}",
        value=node.value,
        balance=balance,
        case=case,
    )


def rotation_chosen(node: AVLNode, case: ImbalanceCase) -> ProgressEvent:
    if case is ImbalanceCase.LEFT_LEFT:
        message = f"Single RIGHT rotation around node {node.value}"
    elif case is ImbalanceCase.RIGHT_RIGHT:
        message = f"Single LEFT rotation around node {node.value}"
    elif case is ImbalanceCase.LEFT_RIGHT:
        message = (f"Double rotation: LEFT on {node.left.value}, "
                   f"then RIGHT on {node.value}")
    else:
        message = (f"Double rotation: RIGHT on {node.right.value}, "
                   f"then LEFT on {node.value}")
    return ProgressEvent(ProgressKind.ROTATION_CHOSEN, message, value=node.value, case=case)


def duplicate_ignored(value: Any) -> ProgressEvent:
    return ProgressEvent(
        ProgressKind.DUPLICATE_IGNORED,
        f"Value {value} already exists in the tree",
        value=value,
    )


def value_not_found(value: Any) -> ProgressEvent:
    return ProgressEvent(
        ProgressKind.VALUE_NOT_FOUND,
        f"Value {value} is not in the tree",
        value=value,
    )


def tree_rebuilt(order: str, size: int) -> ProgressEvent:
    return ProgressEvent(
        ProgressKind.TREE_REBUILT,
        f"Tree built from inorder + {order}order ({size} nodes)",
    )
