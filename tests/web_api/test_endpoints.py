"""
Web API Endpoint Tests
======================
Integration tests for the display and audit endpoints.

Usage:
    pip install safe-display[test]
    pytest tests/web_api/test_endpoints.py -v
"""
import pytest
from pathlib import Path


# Skip entire module if FastAPI not installed
pytest.importorskip("fastapi")


from fastapi.testclient import TestClient
from safe_display.web_api.config import Settings, settings
from safe_display.web_api.main import app


@pytest.fixture
def client():
    """Create test client for FastAPI app."""
    return TestClient(app)


@pytest.fixture
def sample_app(tmp_path, monkeypatch) -> Path:
    """A tiny source tree with one violation of each kind, inside the audit root."""
    monkeypatch.setattr(settings, "AUDIT_ROOT", str(tmp_path))
    (tmp_path / "helpers.py").write_text(
        "import warnings\n"
        "warnings.simplefilter('ignore')\n"
        "def safe_render(v):\n"
        "    return str(v)\n",
        encoding="utf-8",
    )
    (tmp_path / "index.html").write_text("<p>{{ student }}</p>\n", encoding="utf-8")
    return tmp_path


# ============================================================================
# HEALTH ENDPOINT
# ============================================================================

class TestHealthEndpoint:
    """Tests for GET /health"""

    def test_health_returns_200(self, client):
        """Health endpoint returns 200 OK."""
        response = client.get("/health")
        assert response.status_code == 200

    def test_health_returns_ok_status(self, client):
        """Health endpoint returns status: ok."""
        data = client.get("/health").json()
        assert data["status"] == "ok"
        assert "version" in data

    def test_ready(self, client):
        """Readiness endpoint loads the config."""
        response = client.get("/ready")
        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    def test_root(self, client):
        """Root endpoint returns API info."""
        data = client.get("/").json()
        assert data["name"] == "Safe Display API"


# ============================================================================
# DISPLAY ENDPOINTS
# ============================================================================

class TestDisplayEndpoint:
    """Tests for POST /display/"""

    def test_record(self, client):
        """A record is shown by its label."""
        response = client.post(
            "/display/",
            json={"value": {"_id": "64f1c2", "firstName": "Amina", "lastName": "Juma"}},
        )
        assert response.status_code == 200
        assert response.json() == {"text": "Amina Juma", "category": "identified_record"}

    def test_null_uses_fallback(self, client):
        """Null input returns the fallback text."""
        response = client.post("/display/", json={"value": None, "fallback": "N/A"})
        assert response.json() == {"text": "N/A", "category": "nullish"}

    def test_list(self, client):
        """Lists are joined with comma-space."""
        response = client.post("/display/", json={"value": [1, "a", None]})
        assert response.json()["text"] == "1, a, "

    def test_opaque_object(self, client):
        """Objects without an identifier are shown as JSON."""
        response = client.post("/display/", json={"value": {"score": 90}})
        assert response.json() == {"text": '{"score": 90}', "category": "opaque"}


class TestRowsEndpoint:
    """Tests for POST /display/rows"""

    def test_rows(self, client):
        """Records are flattened to display strings."""
        response = client.post(
            "/display/rows",
            json={
                "records": [{"_id": "c1", "name": "Form 2", "section": "A", "stream": "Science"}],
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        row = data["rows"][0]
        assert row["id"] == "c1"
        assert row["full_name"] == "Form 2 A Science"

    def test_too_many_rows(self, client, monkeypatch):
        """Oversized batches are rejected."""
        monkeypatch.setattr(settings, "MAX_ROWS", 1)
        response = client.post("/display/rows", json={"records": [{"id": 1}, {"id": 2}]})
        assert response.status_code == 413


# ============================================================================
# AUDIT ENDPOINT
# ============================================================================

class TestAuditEndpoint:
    """Tests for POST /audit/"""

    def test_audit_returns_findings(self, client, sample_app):
        """Audit returns summary and findings."""
        response = client.post("/audit/", json={"root_path": str(sample_app)})
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "complete"
        assert data["summary"]["total_findings"] == 3
        assert data["summary"]["files_scanned"] == 2
        assert "created_at" in data

    def test_audit_budget(self, client, sample_app):
        """Budget escalates raw-output findings."""
        response = client.post("/audit/", json={"root_path": str(sample_app), "budget": 0})
        raw = [f for f in response.json()["findings"] if f["type"] == "raw_output"]
        assert [f["severity"] for f in raw] == ["high"]

    def test_audit_invalid_path(self, client):
        """Audit with invalid path returns 404."""
        response = client.post("/audit/", json={"root_path": "/nonexistent/path/12345"})
        assert response.status_code == 404

    def test_audit_outside_root(self, client, sample_app, monkeypatch):
        """Paths outside AUDIT_ROOT are refused."""
        monkeypatch.setattr(settings, "AUDIT_ROOT", str(sample_app / "sub"))
        response = client.post("/audit/", json={"root_path": str(sample_app)})
        assert response.status_code == 403

    def test_audit_root_defaults_to_working_directory(self, tmp_path, monkeypatch):
        """Without AUDIT_ROOT the service only audits below its working directory."""
        monkeypatch.delenv("AUDIT_ROOT", raising=False)
        monkeypatch.chdir(tmp_path)
        assert Settings().AUDIT_ROOT == str(Path.cwd())

    def test_audit_outside_default_root_refused(self, client, tmp_path, monkeypatch):
        """A path outside the working directory is refused by default."""
        (tmp_path / "served").mkdir()
        (tmp_path / "elsewhere").mkdir()
        monkeypatch.delenv("AUDIT_ROOT", raising=False)
        monkeypatch.chdir(tmp_path / "served")
        monkeypatch.setattr(settings, "AUDIT_ROOT", Settings().AUDIT_ROOT)
        response = client.post("/audit/", json={"root_path": str(tmp_path / "elsewhere")})
        assert response.status_code == 403

    def test_empty_audit_root_allows_any_path(self, client, tmp_path, monkeypatch):
        """AUDIT_ROOT="" lifts the restriction."""
        monkeypatch.setenv("AUDIT_ROOT", "")
        monkeypatch.setattr(settings, "AUDIT_ROOT", Settings().AUDIT_ROOT)
        (tmp_path / "ok.py").write_text("x = 1\n", encoding="utf-8")
        response = client.post("/audit/", json={"root_path": str(tmp_path)})
        assert response.status_code == 200
