"""Unit tests for the silencetrim web UI."""

import io
import time
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from silencetrim.models import Interval
from silencetrim.web import create_app


@pytest.fixture
def app(tmp_path):
    app = create_app(work_dir=tmp_path)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def _upload(client, filename="test.mp4", content=b"fake video data"):
    return client.post(
        "/api/upload",
        data={"file": (io.BytesIO(content), filename)},
        content_type="multipart/form-data",
    )


def _wait_for(client, job_id, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        status = client.get(f"/api/jobs/{job_id}/status").get_json()
        if status["status"] in ("done", "error"):
            return status
        time.sleep(0.01)
    raise AssertionError("job did not finish")


class TestIndex:
    def test_serves_html(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert b"silencetrim" in resp.data


class TestUpload:
    def test_upload_success(self, client):
        resp = _upload(client)
        assert resp.status_code == 200
        data = resp.get_json()
        assert "job_id" in data
        assert data["filename"] == "test.mp4"

    def test_upload_no_file(self, client):
        resp = client.post("/api/upload")
        assert resp.status_code == 400

    def test_upload_creates_file(self, client, tmp_path):
        resp = _upload(client, content=b"CONTENT")
        job_id = resp.get_json()["job_id"]
        input_file = tmp_path / job_id / "input.mp4"
        assert input_file.exists()
        assert input_file.read_bytes() == b"CONTENT"


class TestProcess:
    def test_process_unknown_job(self, client):
        resp = client.post("/api/jobs/nonexistent/process", json={"trim": {}})
        assert resp.status_code == 404

    def test_process_invalid_options(self, client):
        job_id = _upload(client).get_json()["job_id"]
        resp = client.post(f"/api/jobs/{job_id}/process", json={"trim": {"max_pause": 0}})
        assert resp.status_code == 400
        assert "max_pause" in resp.get_json()["error"]

    def test_process_rejects_string_boolean(self, client):
        job_id = _upload(client).get_json()["job_id"]
        resp = client.post(
            f"/api/jobs/{job_id}/process",
            json={"trim": {"shrink_padding": "false"}},
        )
        assert resp.status_code == 400
        assert "shrink_padding" in resp.get_json()["error"]

    @patch("silencetrim.web.routes.process")
    def test_process_runs_job(self, mock_process, client):
        mock_result = MagicMock()
        mock_result.output_path = Path("/tmp/out.mp4")
        mock_result.duration_original = 22.0
        mock_result.duration_final = 15.0
        mock_result.silences_detected = 3
        mock_result.segments_kept = 2
        mock_result.keep_segments = [Interval(0.0, 3.5), Interval(5.5)]
        mock_process.return_value = mock_result

        job_id = _upload(client).get_json()["job_id"]
        resp = client.post(
            f"/api/jobs/{job_id}/process",
            json={"trim": {
                "max_pause": 2,
                "intro_padding": 0.3,
                "min_silence": 0.4,
                "shrink_padding": False,
            }},
        )
        assert resp.status_code == 200
        assert resp.get_json()["status"] == "started"

        status = _wait_for(client, job_id)
        assert status["status"] == "done"
        assert status["result"]["keep_segments"] == ["0-3.5", "5.5-"]

        manifest = mock_process.call_args[0][0]
        assert manifest.trim.max_pause == 2.0
        assert manifest.trim.intro_padding == 0.3
        assert manifest.trim.min_silence == 0.4
        assert manifest.trim.shrink_padding is False

    @patch("silencetrim.web.routes.process")
    def test_process_failure_recorded(self, mock_process, client):
        mock_process.side_effect = ValueError("ffmpeg output: no Duration line found")

        job_id = _upload(client).get_json()["job_id"]
        client.post(f"/api/jobs/{job_id}/process", json={})

        status = _wait_for(client, job_id)
        assert status["status"] == "error"
        assert "Duration" in status["error"]


class TestStatus:
    def test_status_after_upload(self, client):
        job_id = _upload(client).get_json()["job_id"]

        resp = client.get(f"/api/jobs/{job_id}/status")
        assert resp.status_code == 200
        assert resp.get_json()["status"] == "uploaded"

    def test_status_unknown_job(self, client):
        resp = client.get("/api/jobs/nonexistent/status")
        assert resp.status_code == 404


class TestDownload:
    def test_download_not_complete(self, client):
        job_id = _upload(client).get_json()["job_id"]

        resp = client.get(f"/api/jobs/{job_id}/result")
        assert resp.status_code == 409

    def test_download_unknown_job(self, client):
        resp = client.get("/api/jobs/nonexistent/result")
        assert resp.status_code == 404
