"""
Classification of the children of an XMD data node.

:return : Node classification utilities.
:return: NodeKind enum and classify_node.
"""

from enum import Enum
from typing import Optional
from desframe.xmd.tree import DocumentNode


class NodeKind(Enum):
    STATE = "state"
    EVENT = "event"
    TRANSITION = "transition"


_KINDS_BY_TAG = {kind.value: kind for kind in NodeKind}


def classify_node(node: DocumentNode) -> Optional[NodeKind]:
    """
    Map a child of the data node to its element kind.

    Non-element nodes and unknown tags yield None and are meant to be skipped.

    :param node: Child of the data node.
    :return : NodeKind or None.
    :return: Element kind for state, event and transition tags.
    """
    if node.tag is None:
        return None
    return _KINDS_BY_TAG.get(node.tag)
