"""Integration tests for the REST API."""

from typing import Any

import pytest
from fastapi.testclient import TestClient

from cutopt.web import create_app

pytestmark = pytest.mark.integration


@pytest.fixture
def client() -> TestClient:
    """Create a test client for a fresh application."""
    return TestClient(create_app())


def _optimize_body(**overrides: Any) -> dict[str, Any]:
    body: dict[str, Any] = {
        "sheet": {"width": 1000, "height": 1000},
        "pieces": [{"width": 600, "height": 400, "quantity": 2, "label": "Door"}],
    }
    body.update(overrides)
    return body


class TestHealth:
    """Tests for the health endpoint."""

    def test_health(self, client: TestClient) -> None:
        """The service reports healthy."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestOptimizeEndpoint:
    """Tests for POST /api/v1/optimize."""

    def test_two_pieces(self, client: TestClient) -> None:
        """Two pieces stack on one bootstrap sheet."""
        response = client.post("/api/v1/optimize", json=_optimize_body())

        assert response.status_code == 200
        data = response.json()
        sheet = data["sheets"][0]
        assert [(p["x"], p["y"]) for p in sheet["pieces"]] == [(0, 0), (0, 400)]
        assert sheet["acceptance"] == "bootstrap"
        assert sheet["efficiency"] == pytest.approx(0.48)
        assert data["statistics"]["total_sheets"] == 1
        assert data["unplaced"] == []
        assert data["piece_summary"] == {
            "total_pieces": 2,
            "total_area": 480000,
            "unique_sizes": 1,
        }

    def test_piece_summary_excludes_discarded(self, client: TestClient) -> None:
        """The piece summary counts only pieces that reached the optimizer."""
        response = client.post(
            "/api/v1/optimize",
            json=_optimize_body(
                pieces=[
                    {"width": 600, "height": 400, "quantity": 2},
                    {"width": 100, "height": 100},
                    {"width": 3000, "height": 100},
                ]
            ),
        )

        summary = response.json()["piece_summary"]
        assert summary["total_pieces"] == 3
        assert summary["total_area"] == 490000
        assert summary["unique_sizes"] == 2

    def test_rotation_option(self, client: TestClient) -> None:
        """Options are passed through to the optimizer."""
        response = client.post(
            "/api/v1/optimize",
            json={
                "sheet": {"width": 1000, "height": 800},
                "pieces": [{"width": 100, "height": 900}],
                "options": {"allow_rotation": True},
            },
        )

        assert response.status_code == 200
        placement = response.json()["sheets"][0]["pieces"][0]
        assert placement["rotated"] is True
        assert (placement["placed_width"], placement["placed_height"]) == (900, 100)

    def test_oversized_piece_discarded(self, client: TestClient) -> None:
        """Oversized pieces are discarded by default."""
        body = _optimize_body(
            pieces=[{"width": 600, "height": 400}, {"width": 3000, "height": 100}]
        )
        response = client.post("/api/v1/optimize", json=body)

        data = response.json()
        assert data["discarded"][0]["spec_index"] == 1
        assert data["statistics"]["total_pieces"] == 1

    def test_oversized_piece_unplaced_without_prefilter(self, client: TestClient) -> None:
        """With the pre-filter off, the piece is reported unplaced."""
        body = _optimize_body(pieces=[{"width": 3000, "height": 3000}], prefilter=False)
        response = client.post("/api/v1/optimize", json=body)

        data = response.json()
        assert data["discarded"] == []
        assert data["unplaced"][0]["reason"] == "too_large_even_rotated"

    def test_empty_pieces(self, client: TestClient) -> None:
        """No pieces give an empty result."""
        response = client.post("/api/v1/optimize", json=_optimize_body(pieces=[]))

        assert response.status_code == 200
        assert response.json()["sheets"] == []
        assert response.json()["statistics"]["efficiency"] == 0.0

    def test_invalid_dimension(self, client: TestClient) -> None:
        """Invalid piece dimensions return a 422 with the offending spec."""
        body = _optimize_body(
            pieces=[{"width": 100, "height": 100}, {"width": -5, "height": 100}]
        )
        response = client.post("/api/v1/optimize", json=body)

        assert response.status_code == 422
        data = response.json()
        assert data["error_type"] == "invalid_dimension"
        assert data["details"][0]["spec_index"] == 1
        assert data["details"][0]["field"] == "width"

    def test_invalid_sheet(self, client: TestClient) -> None:
        """A zero-width sheet fails request validation."""
        response = client.post(
            "/api/v1/optimize", json=_optimize_body(sheet={"width": 0, "height": 100})
        )
        assert response.status_code == 422

    def test_unknown_option(self, client: TestClient) -> None:
        """Unknown option keys are rejected."""
        response = client.post(
            "/api/v1/optimize", json=_optimize_body(options={"kerf": 3})
        )
        assert response.status_code == 422


class TestOptimizeFromConfigEndpoint:
    """Tests for POST /api/v1/optimize/from-config."""

    def test_valid_config(self, client: TestClient) -> None:
        """A full configuration is optimized."""
        response = client.post(
            "/api/v1/optimize/from-config",
            json={
                "config": {
                    "schema_version": "1.0",
                    "sheet": {"width": 1000, "height": 1000},
                    "pieces": [{"width": 1000, "height": 500, "quantity": 4}],
                }
            },
        )

        assert response.status_code == 200
        acceptances = [s["acceptance"] for s in response.json()["sheets"]]
        assert acceptances == ["bootstrap", "threshold"]

    def test_invalid_config(self, client: TestClient) -> None:
        """Schema errors return a 422 with paths."""
        response = client.post(
            "/api/v1/optimize/from-config",
            json={"config": {"pieces": [{"width": 10, "height": 10, "quantity": 0}]}},
        )

        assert response.status_code == 422
        data = response.json()
        assert data["error_type"] == "validation"
        assert data["details"][0]["path"] == "pieces[0].quantity"


class TestValidateEndpoint:
    """Tests for POST /api/v1/validate."""

    def test_valid_config(self, client: TestClient) -> None:
        """A clean config is valid without warnings."""
        response = client.post(
            "/api/v1/validate",
            json={"config": {"pieces": [{"width": 600, "height": 400}]}},
        )

        assert response.status_code == 200
        assert response.json() == {"is_valid": True, "errors": [], "warnings": []}

    def test_warnings(self, client: TestClient) -> None:
        """Advisories are returned as warnings."""
        response = client.post(
            "/api/v1/validate",
            json={
                "config": {
                    "sheet": {"width": 1000, "height": 800},
                    "pieces": [{"width": 100, "height": 900}],
                }
            },
        )

        data = response.json()
        assert data["is_valid"] is True
        assert data["warnings"][0]["path"] == "pieces[0]"
        assert "allow_rotation" in data["warnings"][0]["suggestion"]

    def test_schema_errors(self, client: TestClient) -> None:
        """Schema errors are reported in the body."""
        response = client.post(
            "/api/v1/validate", json={"config": {"sheet": {"width": -1}}}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["is_valid"] is False
        assert data["errors"][0]["path"] == "sheet.width"
