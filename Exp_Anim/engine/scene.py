# Exp_Anim/engine/scene.py
"""
Scene - In-memory node hierarchy the animation pass reads and writes.

Each node has an integer id and can carry:
  - a name (used by EntityPath resolution)
  - a parent link and an ordered child list
  - a Transform (rotation / translation / scale)
  - optional MorphWeights
  - an AnimationPlayer

The hierarchy is read-only while the frame pass runs. Transforms and morph
weights are handed out to the pass through AnimationWriteAccess (see
animations/guard.py), never by direct lookup.

Unknown ids read as "absent" (name None, no parent, no children) so a node
despawned mid-frame never aborts the pass. Mutating an unknown id raises
KeyError.
"""

import itertools
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .animations.blend import IDENTITY


class Transform:
    """
    Local transform of a node. Quaternion order: [w, x, y, z].

    Components are float32 numpy arrays and are updated in place by the
    animation pass.
    """

    __slots__ = ('rotation', 'translation', 'scale')

    def __init__(
        self,
        rotation: Optional[Iterable[float]] = None,
        translation: Optional[Iterable[float]] = None,
        scale: Optional[Iterable[float]] = None
    ):
        self.rotation = np.array(IDENTITY[0:4] if rotation is None else rotation, dtype=np.float32)
        self.translation = np.array(IDENTITY[4:7] if translation is None else translation, dtype=np.float32)
        self.scale = np.array(IDENTITY[7:10] if scale is None else scale, dtype=np.float32)

    @classmethod
    def from_array(cls, values: Iterable[float]) -> "Transform":
        """Build from the 10-float layout (qw, qx, qy, qz, lx, ly, lz, sx, sy, sz)."""
        values = np.asarray(values, dtype=np.float32).reshape(10)
        return cls(values[0:4], values[4:7], values[7:10])

    def to_array(self) -> np.ndarray:
        """10-float layout (qw, qx, qy, qz, lx, ly, lz, sx, sy, sz)."""
        return np.concatenate([self.rotation, self.translation, self.scale])

    def __repr__(self) -> str:
        return (f"Transform(rotation={self.rotation.tolist()}, "
                f"translation={self.translation.tolist()}, scale={self.scale.tolist()})")


class MorphWeights:
    """Morph target weights of a mesh node."""

    __slots__ = ('weights',)

    def __init__(self, weights: Iterable[float]):
        self.weights = np.array(weights, dtype=np.float32).reshape(-1)

    def __len__(self) -> int:
        return len(self.weights)

    def __repr__(self) -> str:
        return f"MorphWeights({self.weights.tolist()})"


class _Node:
    __slots__ = ('name', 'parent', 'children', 'transform', 'morphs', 'player')

    def __init__(self, name, transform, morphs):
        self.name: Optional[str] = name
        self.parent: Optional[int] = None
        self.children: List[int] = []
        self.transform: Optional[Transform] = transform
        self.morphs: Optional[MorphWeights] = morphs
        self.player: Any = None


class Scene:
    """
    Node hierarchy with names, transforms, morph weights and players.

    Usage:
        scene = Scene()
        root = scene.spawn("Armature")
        hips = scene.spawn("Hips", parent=root)
        scene.insert_player(root, AnimationPlayer())
    """

    def __init__(self):
        self._nodes: Dict[int, _Node] = {}
        self._ids = itertools.count(1)

    # =========================================================================
    # NODE LIFECYCLE
    # =========================================================================

    def spawn(
        self,
        name: Optional[str] = None,
        parent: Optional[int] = None,
        transform: Optional[Transform] = None,
        morph_weights: Optional[MorphWeights] = None
    ) -> int:
        """Create a node (with an identity Transform by default). Returns its id."""
        entity = next(self._ids)
        self._nodes[entity] = _Node(name, transform if transform is not None else Transform(), morph_weights)
        if parent is not None:
            self.set_parent(entity, parent)
        return entity

    def despawn(self, entity: int) -> None:
        """Remove a node and all of its descendants."""
        node = self._get(entity)
        if node.parent is not None:
            self._nodes[node.parent].children.remove(entity)

        stack = [entity]
        while stack:
            current = stack.pop()
            stack.extend(self._nodes[current].children)
            del self._nodes[current]

    def set_parent(self, entity: int, parent: Optional[int]) -> None:
        """Re-parent a node (appended as last child). None detaches it."""
        node = self._get(entity)

        if parent is not None:
            self._get(parent)
            ancestor = parent
            while ancestor is not None:
                if ancestor == entity:
                    raise ValueError(f"Cannot parent node {entity} under its own descendant {parent}")
                ancestor = self._nodes[ancestor].parent

        if node.parent is not None:
            self._nodes[node.parent].children.remove(entity)

        node.parent = parent
        if parent is not None:
            self._nodes[parent].children.append(entity)

    # =========================================================================
    # HIERARCHY QUERIES
    # =========================================================================

    def name(self, entity: int) -> Optional[str]:
        node = self._nodes.get(entity)
        return node.name if node is not None else None

    def set_name(self, entity: int, name: Optional[str]) -> None:
        self._get(entity).name = name

    def parent(self, entity: int) -> Optional[int]:
        node = self._nodes.get(entity)
        return node.parent if node is not None else None

    def children(self, entity: int) -> List[int]:
        """Ordered child ids. Do not mutate the returned list."""
        node = self._nodes.get(entity)
        return node.children if node is not None else []

    # =========================================================================
    # ANIMATABLE STATE
    # =========================================================================

    def transform(self, entity: int) -> Optional[Transform]:
        node = self._nodes.get(entity)
        return node.transform if node is not None else None

    def morph_weights(self, entity: int) -> Optional[MorphWeights]:
        node = self._nodes.get(entity)
        return node.morphs if node is not None else None

    def set_morph_weights(self, entity: int, weights: Optional[MorphWeights]) -> None:
        self._get(entity).morphs = weights

    # =========================================================================
    # ANIMATION PLAYERS
    # =========================================================================

    def insert_player(self, entity: int, player: Any) -> Any:
        """Attach an AnimationPlayer to a node (replacing any previous one)."""
        self._get(entity).player = player
        return player

    def remove_player(self, entity: int) -> Any:
        node = self._get(entity)
        player, node.player = node.player, None
        return player

    def player(self, entity: int) -> Any:
        node = self._nodes.get(entity)
        return node.player if node is not None else None

    def has_player(self, entity: int) -> bool:
        node = self._nodes.get(entity)
        return node is not None and node.player is not None

    def players(self) -> Iterator[Tuple[int, Optional[int], Any]]:
        """Yield (entity, parent, player) for every node carrying a player."""
        for entity, node in self._nodes.items():
            if node.player is not None:
                yield entity, node.parent, node.player

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _get(self, entity: int) -> _Node:
        node = self._nodes.get(entity)
        if node is None:
            raise KeyError(f"Unknown entity {entity}")
        return node

    def __contains__(self, entity: int) -> bool:
        return entity in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        player_count = sum(1 for node in self._nodes.values() if node.player is not None)
        return f"Scene({len(self._nodes)} nodes, {player_count} players)"
