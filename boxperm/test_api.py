"""
Tests for the FastAPI endpoints exposed by `boxperm.api`, using TestClient.

Run with: pytest -q

Notes:
- Tests are skipped if FastAPI/TestClient dependencies are not available.
- Inputs stay small so every traversal finishes quickly.
"""

import pytest

from boxperm.iterator import PermutationRotationIterator
from boxperm.models import Box, BoxItem, Dimension

# For API tests, ensure fastapi + testclient available; otherwise skip those tests.
fastapi = pytest.importorskip("fastapi")
from fastapi.testclient import TestClient  # type: ignore

from boxperm import api as api_module


def example_request(**extra):
    """
    Three single boxes of 1x1x3 on a 9x1x1 shelf: only the lying orientation
    fits, so there are 3! arrangements with a single rotation each.
    """
    payload = {
        "container": {"width": 9, "depth": 1, "height": 1},
        "items": [
            {"name": str(k), "width": 1, "depth": 1, "height": 3, "count": 1}
            for k in range(3)
        ],
        "rotate_3d": True,
    }
    payload.update(extra)
    return payload


def direct_traversal():
    """Names per arrangement, taken straight from the core iterator."""
    iterator = PermutationRotationIterator.from_box_items(
        [BoxItem(Box(1, 1, 3, name=str(k))) for k in range(3)], Dimension(9, 1, 1)
    )
    names = []
    while True:
        names.append([b.name for b in iterator.current()])
        if not iterator.advance():
            break
    return names


@pytest.fixture
def client():
    """
    FastAPI TestClient fixture for API tests.
    """
    return TestClient(api_module.app)


def test_api_root_and_health(client):
    assert client.get("/health").json() == {"status": "ok"}

    data = client.get("/").json()
    assert data["service"] == "boxperm"
    assert "version" in data


def test_api_orientations_keeps_excluded_types(client):
    payload = example_request()
    payload["items"].insert(
        1, {"name": "pole", "width": 10, "depth": 1, "height": 1, "count": 2}
    )

    response = client.post("/orientations", json=payload)
    assert response.status_code == 200, (
        f"API error: {response.status_code} - {response.text}"
    )

    data = response.json()
    assert [entry["index"] for entry in data] == [0, 1, 2, 3]
    assert data[1]["orientations"] == []
    assert data[1]["count"] == 2
    assert data[0]["orientations"] == [
        {"name": "0", "width": 3, "depth": 1, "height": 1}
    ]


def test_api_count(client):
    payload = example_request(
        items=[
            {"name": "a", "width": 1, "depth": 1, "height": 3, "count": 2},
            {"name": "b", "width": 1, "depth": 1, "height": 3, "count": 4},
        ]
    )

    response = client.post("/count", json=payload)
    assert response.status_code == 200, (
        f"API error: {response.status_code} - {response.text}"
    )
    assert response.json() == {
        "length": 6,
        "box_item_length": 2,
        "permutations": 15,
        "rotations": 1,
    }


def test_api_count_reports_overflow(client):
    payload = {
        "container": {"width": 125, "depth": 10, "height": 10},
        "items": [
            {"width": 5, "depth": 10, "height": 10, "count": 1} for _ in range(25)
        ],
    }

    response = client.post("/count", json=payload)
    assert response.status_code == 200
    assert response.json()["permutations"] == -1


def test_api_enumerate_pages_resume(client):
    first = client.post("/enumerate", json=example_request(limit=4))
    assert first.status_code == 200, (
        f"API error: {first.status_code} - {first.text}"
    )
    first_data = first.json()
    assert len(first_data["arrangements"]) == 4
    assert first_data["exhausted"] is False
    assert first_data["state"] is not None

    second = client.post(
        "/enumerate", json=example_request(limit=4, state=first_data["state"])
    )
    assert second.status_code == 200
    second_data = second.json()
    assert len(second_data["arrangements"]) == 2
    assert second_data["exhausted"] is True
    assert second_data["state"] is None

    pages = first_data["arrangements"] + second_data["arrangements"]
    assert [[b["name"] for b in arrangement] for arrangement in pages] == (
        direct_traversal()
    )


def test_api_enumerate_rejects_unknown_state(client):
    payload = example_request(state={"permutations": [0, 1, 7], "rotations": [0, 0, 0]})

    response = client.post("/enumerate", json=payload)
    assert response.status_code == 400


def test_api_enumerate_rejects_state_with_too_many_instances(client):
    payload = example_request(state={"permutations": [0, 0, 0], "rotations": [0, 0, 0]})

    response = client.post("/enumerate", json=payload)
    assert response.status_code == 400, (
        f"API accepted an impossible state: {response.text}"
    )


@pytest.mark.parametrize(
    "extra",
    [
        {"limit": 0},
        {"state": {"permutations": [0, 1], "rotations": [0]}},
        {"items": []},
    ],
)
def test_api_enumerate_validation(client, extra):
    response = client.post("/enumerate", json=example_request(**extra))
    assert response.status_code == 422
