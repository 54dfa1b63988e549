"""
FastAPI application exposing the permutation/rotation enumerator.

This module provides a small API surface built on top of the enumerator in
boxperm.

Endpoints:
- GET /health
- GET / (service info / version)
- POST /orientations -> admissible orientations per box type
- POST /count        -> closed-form permutation and rotation counts
- POST /enumerate    -> one page of arrangements plus the cursor to resume from

Notes:
- The API uses the Pydantic request/response models defined in `boxperm.models`.
- No enumerator is kept between requests; a client resumes a traversal by
  sending back the `state` returned with the previous page.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__ as PACKAGE_VERSION
from .config import LOG_LEVEL
from .iterator import PermutationRotationIterator
from .models import (
    CountResult,
    EnumerateRequest,
    EnumerationPage,
    OrientationRequest,
    TypeOrientationsRead,
    boxitemcreate_to_dataclass,
    containercreate_to_dataclass,
    orientation_from_dataclass,
    state_from_model,
    state_to_model,
    type_orientations_from_dataclasses,
)

logger = logging.getLogger("boxperm")
logging.basicConfig(level=LOG_LEVEL)

app = FastAPI(
    title="boxperm - permutation/rotation enumerator",
    version=PACKAGE_VERSION,
    description="API wrapper around the box permutation and rotation enumerator.",
)

# Allow cross-origin calls for common dev scenarios (adjust origins in production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------
# Health & info endpoints
# ---------------------------


@app.get("/", summary="Service info")
async def root() -> Dict[str, Any]:
    """
    Basic service information and version.
    """
    return {"service": "boxperm", "version": PACKAGE_VERSION}


@app.get("/health", summary="Health check")
async def health() -> Dict[str, str]:
    return {"status": "ok"}


# ---------------------------
# Enumerator endpoints
# ---------------------------


def _build_iterator(request: OrientationRequest) -> PermutationRotationIterator:
    """Convert Pydantic -> dataclasses and build a fresh iterator."""
    bound = containercreate_to_dataclass(request.container)
    items = [boxitemcreate_to_dataclass(it) for it in request.items]
    return PermutationRotationIterator.from_box_items(
        items, bound, rotate_3d=request.rotate_3d
    )


@app.post(
    "/orientations",
    response_model=List[TypeOrientationsRead],
    summary="Admissible orientations per box type",
)
async def orientations(request: OrientationRequest) -> List[TypeOrientationsRead]:
    """
    One entry per requested box type, in request order. Types that fit the
    container in no orientation are returned with an empty list.
    """
    iterator = _build_iterator(request)

    logger.info(
        "orientations called: %d box types, rotate_3d=%s",
        len(request.items),
        request.rotate_3d,
    )

    return type_orientations_from_dataclasses(iterator.matrix)


@app.post("/count", response_model=CountResult, summary="Closed-form counts")
async def count(request: OrientationRequest) -> CountResult:
    """
    Number of distinct arrangements and of rotation combinations for the
    initial arrangement. A value of -1 means too large to count; enumerate
    instead.
    """
    iterator = _build_iterator(request)

    result = CountResult(
        length=iterator.length(),
        box_item_length=iterator.box_item_length(),
        permutations=iterator.count_permutations(),
        rotations=iterator.count_rotations(),
    )

    logger.info(
        "count called: %d box types, %d slots, permutations=%d, rotations=%d",
        result.box_item_length,
        result.length,
        result.permutations,
        result.rotations,
    )
    return result


@app.post(
    "/enumerate",
    response_model=EnumerationPage,
    summary="Page through arrangements (permutation x rotation)",
)
async def enumerate_arrangements(request: EnumerateRequest) -> EnumerationPage:
    """
    Return up to `limit` arrangements, starting at `state` (or at the first
    arrangement). The returned `state` points at the next arrangement not yet
    returned; it is null once the traversal is exhausted.
    """
    iterator = _build_iterator(request)

    if request.state is not None:
        try:
            iterator.set_state(state_from_model(request.state))
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

    logger.info(
        "enumerate called: %d box types, %d slots, limit=%d, resumed=%s",
        len(request.items),
        iterator.length(),
        request.limit,
        request.state is not None,
    )

    arrangements = []
    exhausted = False
    while len(arrangements) < request.limit:
        arrangements.append(
            [orientation_from_dataclass(b) for b in iterator.current()]
        )
        if not iterator.advance():
            exhausted = True
            break

    return EnumerationPage(
        arrangements=arrangements,
        state=None if exhausted else state_to_model(iterator.get_state()),
        exhausted=exhausted,
    )


# ---------------------------
# Exception handlers & utilities
# ---------------------------


@app.exception_handler(ValueError)
async def value_error_handler(request, exc: ValueError):
    logger.warning("Rejected request: %s", exc)
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def generic_exception_handler(request, exc):
    # Basic generic handler to ensure JSON responses for unexpected errors.
    logger.exception("Unhandled exception: %s", exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})
