# boxperm/iterator.py
"""
Permutations and rotations of a list of box items, in the same class.

The number of combinations is at most n! * 6^n. Accounting for the container
bound and for sides of equal length usually brings that down a lot, and the
reduced number can be obtained before starting (count_permutations and
count_rotations).

Identical boxes are never interchanged: the slot list holds type indices and
is walked through its multiset permutations in lexicographic order, see
https://www.nayuki.io/page/next-lexicographical-permutation-algorithm

Assumes a do-while approach:

    while True:
        while True:
            for i in range(iterator.length()):
                box = iterator.get(i)
                # .. your code here
            if not iterator.next_rotation():
                break
        if not iterator.next_permutation():
            break

Instances are not thread-safe. Run several instances over the same input
instead, handing cursors between them with get_state / set_state.
"""

from __future__ import annotations

import logging
import numbers
from collections import Counter
from typing import Iterable, List, Sequence, Union

from .models import (
    Box,
    BoxItem,
    Dimension,
    PermutationRotation,
    PermutationRotationState,
)
from .rotations import constrain, to_rotation_matrix

logger = logging.getLogger(__name__)

# Largest value of a signed 64-bit counter; counts beyond it are reported as -1.
LONG_MAX = 2**63 - 1


class PermutationRotationIterator:
    """
    Cursor over (permutation, rotation) pairs for a list of box types.

    - permutations: type index per slot, ascending at start and after removal
    - rotations: orientation index per slot, into the occupying type's boxes
    """

    def __init__(
        self, bound: Dimension, unconstrained: Sequence[PermutationRotation]
    ) -> None:
        self.matrix: List[PermutationRotation] = constrain(bound, unconstrained)
        self.dimension = bound

        # one entry per instance; identical boxes share a type index
        types: List[int] = []
        for i, pr in enumerate(self.matrix):
            if pr.boxes:
                types.extend([i] * pr.count)

        self.permutations: List[int] = types
        self.reset: List[int] = [0] * len(types)
        self.rotations: List[int] = [0] * len(types)

        logger.debug(
            "iterator over %d box types, %d slots, bound %sx%sx%s",
            len(self.matrix),
            len(types),
            bound.width,
            bound.depth,
            bound.height,
        )

    @classmethod
    def from_box_items(
        cls, items: Sequence[BoxItem], bound: Dimension, rotate_3d: bool = True
    ) -> "PermutationRotationIterator":
        return cls(bound, to_rotation_matrix(items, rotate_3d))

    # ----------------------------
    # Removal
    # ----------------------------

    def remove_permutations(self, removed: Union[int, Iterable[int]]) -> None:
        """
        Discard slots and restart from the smallest arrangement of the rest.

        - int: drop that many slots from the front (the already decided prefix)
        - iterable of type indices: drop one occurrence per value

        Raises ValueError, leaving the iterator untouched, if the requested
        slots are not all present.
        """
        if isinstance(removed, bool):
            raise TypeError(
                "remove_permutations expects a count or type indices, got a bool"
            )
        if isinstance(removed, numbers.Integral):
            permutations = self._without_prefix(int(removed))
        else:
            permutations = self._without_values(list(removed))

        # ascending order to make the permutation logic work
        permutations.sort()

        self.permutations = permutations
        self.rotations = [0] * len(permutations)
        self.reset = [0] * len(permutations)

        logger.debug("removed slots, %d remaining", len(permutations))

    def _without_prefix(self, count: int) -> List[int]:
        if count < 0 or count > len(self.permutations):
            raise ValueError(
                f"cannot remove {count} of {len(self.permutations)} permutations"
            )
        return self.permutations[count:]

    def _without_values(self, values: List[int]) -> List[int]:
        missing = Counter(values) - Counter(self.permutations)
        if missing:
            raise ValueError(
                f"type indices not present in permutations: {sorted(missing.elements())}"
            )

        pending = Counter(values)
        permutations: List[int] = []
        for j in self.permutations:
            if pending[j] > 0:
                pending[j] -= 1
                continue
            permutations.append(j)
        return permutations

    # ----------------------------
    # Advance
    # ----------------------------

    def next_rotation(self) -> bool:
        """
        Step the rotation odometer; slot 0 is the least significant digit.
        Returns False once every rotation of the current permutation was visited.
        """
        for i in range(len(self.rotations)):
            if self.rotations[i] < len(self.matrix[self.permutations[i]].boxes) - 1:
                self.rotations[i] += 1

                # reset all previous counters
                self.rotations[:i] = self.reset[:i]

                return True

        return False

    def reset_rotations(self) -> None:
        self.rotations[:] = self.reset

    def next_permutation(self) -> bool:
        """
        Move to the next lexicographic arrangement of the slots, restarting the
        rotations. Returns False when the last (descending) arrangement is reached.
        """
        self.reset_rotations()

        permutations = self.permutations

        # find longest non-increasing suffix
        i = len(permutations) - 1
        while i > 0 and permutations[i - 1] >= permutations[i]:
            i -= 1
        # now i is the head index of the suffix

        # are we at the last permutation already?
        if i <= 0:
            return False

        # let permutations[i - 1] be the pivot,
        # find rightmost element that exceeds the pivot
        j = len(permutations) - 1
        while permutations[j] <= permutations[i - 1]:
            j -= 1

        permutations[i - 1], permutations[j] = permutations[j], permutations[i - 1]

        # reverse the suffix
        permutations[i:] = permutations[i:][::-1]

        return True

    def advance(self) -> bool:
        """
        One step of the nested traversal: the next rotation, or the next
        permutation once the rotations are exhausted.
        """
        return self.next_rotation() or self.next_permutation()

    # ----------------------------
    # Counters
    # ----------------------------

    def count_rotations(self) -> int:
        """
        Number of rotation combinations for the current permutation,
        or -1 if it does not fit in a signed 64-bit integer.
        """
        n = 1
        for t in self.permutations:
            factor = len(self.matrix[t].boxes)
            if LONG_MAX // factor <= n:
                return -1

            n = n * factor
        return n

    def count_permutations(self) -> int:
        """
        Number of distinct arrangements of the slots, n! / (c1! * c2! * ...),
        or -1 if it does not fit in a signed 64-bit integer.

        Divisions are interleaved with the factorial so the running value stays
        small; only the multiplication can overflow.
        """
        counts = Counter(self.permutations).values()
        max_count = max(counts, default=0)

        n = 1
        if max_count > 1:
            # factors[k]: pending divisions by (k + 1)
            factors = [0] * max_count
            for c in counts:
                for k in range(c):
                    factors[k] += 1

            for i in range(len(self.permutations)):
                if LONG_MAX // (i + 1) <= n:
                    return -1

                n = n * (i + 1)

                for k in range(1, max_count):
                    while factors[k] > 0 and n % (k + 1) == 0:
                        n = n // (k + 1)

                        factors[k] -= 1

            for k in range(1, max_count):
                while factors[k] > 0:
                    n = n // (k + 1)

                    factors[k] -= 1
        else:
            for i in range(len(self.permutations)):
                if LONG_MAX // (i + 1) <= n:
                    return -1
                n = n * (i + 1)
        return n

    # ----------------------------
    # Accessors
    # ----------------------------

    def get_orientations(self, index: int) -> int:
        """
        Number of orientations the box at slot `index` fits in.
        """
        self._check_index(index)
        return len(self.matrix[self.permutations[index]].boxes)

    def get(self, index: int) -> Box:
        self._check_index(index)
        return self.matrix[self.permutations[index]].boxes[self.rotations[index]]

    def current(self) -> List[Box]:
        """The oriented boxes of every slot, in slot order."""
        return [self.get(i) for i in range(len(self.permutations))]

    def is_within_height(self, from_index: int, height: int) -> bool:
        if from_index < 0:
            raise IndexError(f"slot index must be non-negative, got {from_index}")
        for i in range(from_index, len(self.permutations)):
            if self.get(i).height > height:
                return False
        return True

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.permutations):
            raise IndexError(
                f"slot index {index} out of range for {len(self.permutations)} slots"
            )

    def get_rotations(self) -> List[int]:
        return list(self.rotations)

    def get_permutations(self) -> List[int]:
        return list(self.permutations)

    def length(self) -> int:
        return len(self.permutations)

    def box_item_length(self) -> int:
        """
        Number of box items passed to the constructor, including the ones that
        fit in no orientation.
        """
        return len(self.matrix)

    def get_dimension(self) -> Dimension:
        return self.dimension

    # ----------------------------
    # Snapshot / restore
    # ----------------------------

    def get_state(self) -> PermutationRotationState:
        return PermutationRotationState(
            rotations=tuple(self.rotations), permutations=tuple(self.permutations)
        )

    def set_state(self, state: PermutationRotationState) -> None:
        """
        Restore cursors from a snapshot (possibly taken from another instance
        over the same box items).

        Raises ValueError if the state references an unknown or excluded type,
        a rotation the type does not have, or more instances of a type than
        were passed to the constructor.
        """
        surplus = [
            t
            for t, n in Counter(state.permutations).items()
            if 0 <= t < len(self.matrix) and n > self.matrix[t].count
        ]
        if surplus:
            raise ValueError(
                f"more slots than instances for box types {sorted(surplus)}"
            )

        for slot, (t, r) in enumerate(zip(state.permutations, state.rotations)):
            if not 0 <= t < len(self.matrix) or not self.matrix[t].boxes:
                raise ValueError(f"slot {slot}: no admissible box type {t}")
            if not 0 <= r < len(self.matrix[t].boxes):
                raise ValueError(
                    f"slot {slot}: rotation {r} out of range for box type {t}"
                )

        self.rotations = state.get_rotations()
        self.permutations = state.get_permutations()
        self.reset = [0] * len(self.permutations)


__all__ = ["LONG_MAX", "PermutationRotationIterator"]
