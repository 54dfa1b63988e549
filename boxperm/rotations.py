# boxperm/rotations.py
"""
Orientation building and bound filtering.

- to_rotation_matrix: the distinct orientations of every box type, skipping
  orientations that are geometrically identical to one already listed
- constrain: keep only the orientations that fit inside a bound

The original (unrotated) box is always the first orientation of its type.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from .models import Box, BoxItem, Dimension, PermutationRotation

logger = logging.getLogger(__name__)

# ----------------------------
# Orientation builder
# ----------------------------


def orientations_2d(box: Box) -> List[Box]:
    """
    Original orientation plus the footprint rotation, unless the footprint is
    square (the rotated box would be identical).
    """
    result = [box]
    if not box.is_square_2d:
        result.append(box.rotate_2d())
    return result


def orientations_3d(box: Box) -> List[Box]:
    """
    Up to six distinct orientations.

    A cube has a single orientation. Otherwise the box is cycled through its
    three axes; if any of those has a square footprint the box has two equal
    sides and the three cycles already cover every distinct orientation.
    """
    result = [box]
    if box.is_square_3d:
        return result

    square0 = box.is_square_2d

    box = box.rotate_3d()
    square1 = box.is_square_2d
    result.append(box)

    box = box.rotate_3d()
    square2 = box.is_square_2d
    result.append(box)

    if not square0 and not square1 and not square2:
        box = box.rotate_2d_3d()
        result.append(box)

        box = box.rotate_3d()
        result.append(box)

        box = box.rotate_3d()
        result.append(box)

    return result


def to_rotation_matrix(
    items: Sequence[BoxItem], rotate_3d: bool
) -> List[PermutationRotation]:
    """
    Build the unconstrained orientations for each box item, in input order.
    """
    build = orientations_3d if rotate_3d else orientations_2d
    return [
        PermutationRotation(count=item.count, boxes=tuple(build(item.box)))
        for item in items
    ]


# ----------------------------
# Bound filter
# ----------------------------


def constrain(
    bound: Dimension, unconstrained: Sequence[PermutationRotation]
) -> List[PermutationRotation]:
    """
    Drop the orientations that do not fit inside `bound`.

    Every type is kept, even with no orientation left, so that type indices
    are comparable between enumerators built from the same input.
    """
    matrix: List[PermutationRotation] = []
    for pr in unconstrained:
        boxes = tuple(
            b for b in pr.boxes if b is not None and b.fits_inside_3d(bound)
        )
        matrix.append(PermutationRotation(count=pr.count, boxes=boxes))

    excluded = [i for i, pr in enumerate(matrix) if not pr.boxes]
    if excluded:
        logger.debug(
            "%d of %d box types cannot fit %sx%sx%s: %s",
            len(excluded),
            len(matrix),
            bound.width,
            bound.depth,
            bound.height,
            excluded,
        )
    return matrix


__all__ = [
    "orientations_2d",
    "orientations_3d",
    "to_rotation_matrix",
    "constrain",
]
