"""Fixed 12-joint stick-figure topology.

The hierarchy is static: joint ids, names and parents never change at
runtime.  Everything that walks the tree (FK interpolation, drag
propagation) iterates :data:`TOPOLOGICAL_ORDER`, which guarantees a parent is
visited before any of its children.
"""

from __future__ import annotations

from collections import deque
from typing import NamedTuple


class Joint(NamedTuple):
    """Identity of one skeletal landmark."""

    id: int
    name: str
    parent_id: int | None


ROOT_ID = 7

JOINTS: tuple[Joint, ...] = (
    Joint(0, "head", 1),
    Joint(1, "neck", 2),
    Joint(2, "spine_mid", 7),
    Joint(3, "l_elbow", 1),
    Joint(4, "l_hand", 3),
    Joint(5, "r_elbow", 1),
    Joint(6, "r_hand", 5),
    Joint(7, "spine_pelvis", None),
    Joint(8, "l_knee", 7),
    Joint(9, "l_foot", 8),
    Joint(10, "r_knee", 7),
    Joint(11, "r_foot", 10),
)

JOINT_COUNT = len(JOINTS)
JOINT_IDS: tuple[int, ...] = tuple(j.id for j in JOINTS)
JOINT_NAMES: dict[int, str] = {j.id: j.name for j in JOINTS}
PARENT_MAP: dict[int, int | None] = {j.id: j.parent_id for j in JOINTS}

# Effector -> (mid joint, chain root).  Only hands and feet are IK effectors.
IK_CHAINS: dict[int, tuple[int, int]] = {
    4: (3, 1),
    6: (5, 1),
    9: (8, 7),
    11: (10, 7),
}


def _build_children() -> dict[int, tuple[int, ...]]:
    children: dict[int, list[int]] = {j.id: [] for j in JOINTS}
    for joint in JOINTS:
        if joint.parent_id is not None:
            children[joint.parent_id].append(joint.id)
    return {k: tuple(v) for k, v in children.items()}


CHILDREN: dict[int, tuple[int, ...]] = _build_children()


def _build_topological_order() -> tuple[int, ...]:
    """Breadth-first walk from the root; parents always precede children."""
    order: list[int] = []
    queue = deque([ROOT_ID])
    while queue:
        joint_id = queue.popleft()
        order.append(joint_id)
        queue.extend(CHILDREN[joint_id])
    if len(order) != JOINT_COUNT:
        msg = f"skeleton is not a single tree rooted at {ROOT_ID}"
        raise RuntimeError(msg)
    return tuple(order)


TOPOLOGICAL_ORDER: tuple[int, ...] = _build_topological_order()

# Parent/child pairs to draw as bones.
BONES: tuple[tuple[int, int], ...] = tuple(
    (j.parent_id, j.id) for j in JOINTS if j.parent_id is not None
)


def descendants(joint_id: int) -> list[int]:
    """Return every joint below *joint_id*, in topological order."""
    below: set[int] = {joint_id}
    result: list[int] = []
    for jid in TOPOLOGICAL_ORDER:
        parent = PARENT_MAP[jid]
        if parent is not None and parent in below:
            below.add(jid)
            result.append(jid)
    return result


def joint_id_for(name_or_id: str | int) -> int:
    """Resolve a joint name (``"l_hand"``) or numeric id to an id."""
    if isinstance(name_or_id, int) or str(name_or_id).isdigit():
        jid = int(name_or_id)
        if jid not in JOINT_NAMES:
            msg = f"unknown joint id: {jid}"
            raise KeyError(msg)
        return jid
    for jid, name in JOINT_NAMES.items():
        if name == name_or_id:
            return jid
    msg = f"unknown joint name: {name_or_id}"
    raise KeyError(msg)
