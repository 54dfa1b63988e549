# boxperm/models.py
"""
Core datamodels for boxperm.

This module provides:
- Dataclass-based core models used by the enumerator (geometry-focused).
- Pydantic models used for API input/output (serialization & validation).
- Small conversion helpers between dataclasses and pydantic models.

Dataclasses stay free of framework-specific dependencies so they can be used
directly by the enumerator. Pydantic models are thin wrappers for
validation/IO when exposing the functionality through FastAPI.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .config import DEFAULT_PAGE_SIZE, DEFAULT_ROTATE_3D, MAX_PAGE_SIZE

# ----------------------------
# Dataclass core models
# ----------------------------


@dataclass(frozen=True)
class Dimension:
    """
    Axis-aligned extent: width (x), depth (y) and height (z).

    Used both as the container bound and as the base of `Box`.
    """

    width: int
    depth: int
    height: int
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if self.width < 0 or self.depth < 0 or self.height < 0:
            raise ValueError(
                f"extents must be non-negative, got "
                f"{self.width}x{self.depth}x{self.height}"
            )

    def fits_inside_3d(self, bound: "Dimension") -> bool:
        """
        Check each extent against the matching extent of `bound`.
        No rotation is attempted.
        """
        return (
            self.width <= bound.width
            and self.depth <= bound.depth
            and self.height <= bound.height
        )


@dataclass(frozen=True)
class Box(Dimension):
    """
    A box template or one of its orientations.

    Boxes are immutable: every rotation returns a new Box carrying the same
    name and weight.
    """

    weight: int = 0

    @property
    def is_square_2d(self) -> bool:
        """Footprint is square (width == depth)."""
        return self.width == self.depth

    @property
    def is_square_3d(self) -> bool:
        """All three extents are equal."""
        return self.width == self.depth == self.height

    def rotate_2d(self) -> "Box":
        """Rotate 90 degrees about the vertical axis: (w, d, h) -> (d, w, h)."""
        return replace(self, width=self.depth, depth=self.width)

    def rotate_3d(self) -> "Box":
        """Cycle the axes: (w, d, h) -> (d, h, w)."""
        return replace(self, width=self.depth, depth=self.height, height=self.width)

    def rotate_2d_3d(self) -> "Box":
        """Footprint rotation followed by an axis cycle: (w, d, h) -> (w, h, d)."""
        return self.rotate_2d().rotate_3d()


@dataclass(frozen=True)
class BoxItem:
    """
    A box template with the number of identical physical instances.
    """

    box: Box
    count: int = 1

    def __post_init__(self) -> None:
        if self.count < 1:
            raise ValueError(f"count must be positive, got {self.count}")


@dataclass(frozen=True)
class PermutationRotation:
    """
    Admissible orientations of one box type, plus its instance count.

    `boxes` may be empty when no orientation fits the bound; the entry is
    kept anyway so its position stays a stable type index.
    """

    count: int
    boxes: Tuple[Box, ...]


@dataclass(frozen=True)
class PermutationRotationState:
    """Snapshot of the enumerator cursors: rotation index and type index per slot."""

    rotations: Tuple[int, ...]
    permutations: Tuple[int, ...]

    def __post_init__(self) -> None:
        if len(self.rotations) != len(self.permutations):
            raise ValueError(
                f"rotations ({len(self.rotations)}) and permutations "
                f"({len(self.permutations)}) must have the same length"
            )

    def get_rotations(self) -> List[int]:
        return list(self.rotations)

    def get_permutations(self) -> List[int]:
        return list(self.permutations)


# ----------------------------
# Pydantic models for API surface
# ----------------------------

# Input models (Create / Request)


class ContainerCreate(BaseModel):
    width: int = Field(..., ge=0)
    depth: int = Field(..., ge=0)
    height: int = Field(..., ge=0)
    name: Optional[str] = Field(None)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"width": 9, "depth": 1, "height": 1, "name": "Shelf"}
        }
    )


class BoxItemCreate(BaseModel):
    name: Optional[str] = Field(None, description="Label reported for every orientation")
    width: int = Field(..., ge=0)
    depth: int = Field(..., ge=0)
    height: int = Field(..., ge=0)
    weight: int = Field(0, ge=0)
    count: int = Field(1, ge=1, description="Number of identical instances")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "SKU-123",
                "width": 1,
                "depth": 1,
                "height": 3,
                "weight": 0,
                "count": 2,
            }
        }
    )


class StateModel(BaseModel):
    """Cursor state handed back by /enumerate to resume a traversal."""

    permutations: List[int] = Field(default_factory=list)
    rotations: List[int] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_lengths(self) -> "StateModel":
        if len(self.permutations) != len(self.rotations):
            raise ValueError("permutations and rotations must have the same length")
        return self


class OrientationRequest(BaseModel):
    container: ContainerCreate
    items: List[BoxItemCreate] = Field(..., min_length=1)
    rotate_3d: bool = Field(DEFAULT_ROTATE_3D)


class EnumerateRequest(OrientationRequest):
    limit: int = Field(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
    state: Optional[StateModel] = Field(
        None, description="Resume from this cursor; start from the beginning if omitted"
    )


# Output models (Read / Response)


class OrientationRead(BaseModel):
    name: Optional[str]
    width: int
    depth: int
    height: int

    model_config = ConfigDict(from_attributes=True)


class TypeOrientationsRead(BaseModel):
    index: int
    count: int
    orientations: List[OrientationRead]


class CountResult(BaseModel):
    length: int
    box_item_length: int
    permutations: int = Field(..., description="-1 when too large to count")
    rotations: int = Field(..., description="-1 when too large to count")


class EnumerationPage(BaseModel):
    arrangements: List[List[OrientationRead]]
    state: Optional[StateModel]
    exhausted: bool


# ----------------------------
# Conversion helpers
# ----------------------------


def containercreate_to_dataclass(cc: ContainerCreate) -> Dimension:
    """Convert ContainerCreate (pydantic) to Dimension dataclass."""
    return Dimension(width=cc.width, depth=cc.depth, height=cc.height, name=cc.name)


def boxitemcreate_to_dataclass(bc: BoxItemCreate) -> BoxItem:
    """Convert BoxItemCreate (pydantic) to BoxItem dataclass."""
    box = Box(
        width=bc.width,
        depth=bc.depth,
        height=bc.height,
        name=bc.name,
        weight=bc.weight,
    )
    return BoxItem(box=box, count=bc.count)


def orientation_from_dataclass(box: Box) -> OrientationRead:
    return OrientationRead.model_validate(box)


def type_orientations_from_dataclasses(
    matrix: Sequence[PermutationRotation],
) -> List[TypeOrientationsRead]:
    """One entry per type, in input order, empty orientation lists included."""
    return [
        TypeOrientationsRead(
            index=i,
            count=pr.count,
            orientations=[orientation_from_dataclass(b) for b in pr.boxes],
        )
        for i, pr in enumerate(matrix)
    ]


def state_from_model(sm: StateModel) -> PermutationRotationState:
    return PermutationRotationState(
        rotations=tuple(sm.rotations), permutations=tuple(sm.permutations)
    )


def state_to_model(state: PermutationRotationState) -> StateModel:
    return StateModel(
        permutations=state.get_permutations(), rotations=state.get_rotations()
    )


# Expose minimal public API from this module
__all__ = [
    "Dimension",
    "Box",
    "BoxItem",
    "PermutationRotation",
    "PermutationRotationState",
    "ContainerCreate",
    "BoxItemCreate",
    "StateModel",
    "OrientationRequest",
    "EnumerateRequest",
    "OrientationRead",
    "TypeOrientationsRead",
    "CountResult",
    "EnumerationPage",
    "containercreate_to_dataclass",
    "boxitemcreate_to_dataclass",
    "orientation_from_dataclass",
    "type_orientations_from_dataclasses",
    "state_from_model",
    "state_to_model",
]
