from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from api.router import limiter
from config import settings
from main import app

client = TestClient(app)

SAMPLE_JD = """
Senior Python Developer

Requirements:
- 5+ years of experience with Python
- Experience with PostgreSQL and Redis
- Familiarity with Docker and Kubernetes
"""

SAMPLE_RESUME = "Jane Doe\njane@x.com\nEXPERIENCE\nSenior Engineer\nAcme Corp\n2020 - Present\n• Built systems"

COMPARISON = {
    "matchedSkills": ["Python", "communication"],
    "missingSkills": ["Kubernetes"],
    "experienceMatch": 70,
}


@pytest.fixture(autouse=True)
def _reset_rate_limits():
    limiter.reset()
    yield


def _patch_text(return_value):
    return patch("services.gemini_client.generate_text", new=AsyncMock(return_value=return_value))


def _patch_json(return_value):
    return patch("services.gemini_client.generate_json", new=AsyncMock(return_value=return_value))


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert isinstance(data["gemini_configured"], bool)


class TestExtractJobDetails:
    def test_success(self):
        reply = 'Here is the JSON:\n```json\n{"company":"Acme","title":"Engineer"}\n```\nHope this helps!'
        with _patch_text(reply):
            response = client.post("/jobs/extract-job-details", json={"jobDescription": SAMPLE_JD})
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        details = body["jobDetails"]
        assert details["company"] == "Acme"
        assert details["salary"] == "N/A"
        assert details["requirements"] == []
        assert len(details) == 25

    def test_unparseable_model_output(self):
        with _patch_text("I could not find a job posting."):
            response = client.post("/jobs/extract-job-details", json={"jobDescription": SAMPLE_JD})
        assert response.status_code == 502
        assert response.json() == {
            "success": False,
            "data": "Could not parse the AI response; please retry.",
        }

    def test_model_unavailable(self):
        with _patch_text(None):
            response = client.post("/jobs/extract-job-details", json={"jobDescription": SAMPLE_JD})
        assert response.status_code == 503
        assert response.json()["success"] is False

    def test_blank_description(self):
        response = client.post("/jobs/extract-job-details", json={"jobDescription": "  "})
        assert response.status_code == 400
        assert response.json()["data"] == "Job description text is required"

    def test_missing_field(self):
        response = client.post("/jobs/extract-job-details", json={})
        assert response.status_code == 422


class TestCompareResume:
    def test_success(self):
        with _patch_json(COMPARISON):
            response = client.post(
                "/jobs/compare-resume",
                json={"resumeText": SAMPLE_RESUME, "jobDescription": SAMPLE_JD},
            )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["matchedSkills"] == ["Python"]
        assert data["missingSkills"] == ["Kubernetes"]
        assert data["invalidKeywords"] == ["communication"]
        assert data["matchPercentage"] == data["overallScore"]
        assert "error" not in data

    def test_model_error_is_bad_request(self):
        with _patch_json({"error": "Job description is missing or insufficient"}):
            response = client.post(
                "/jobs/compare-resume",
                json={"resumeText": SAMPLE_RESUME, "jobDescription": SAMPLE_JD},
            )
        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "data": "Job description is missing or insufficient",
        }


class TestResumeUpload:
    def test_upload_and_analyze(self, resume_store):
        with _patch_json(COMPARISON):
            response = client.post(
                "/resume/upload",
                files={"resume_file": ("jane.txt", SAMPLE_RESUME.encode(), "text/plain")},
                data={"job_description": SAMPLE_JD},
            )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["analysisResult"]["matchedSkills"] == ["Python"]
        assert data["resumeText"] == SAMPLE_RESUME
        assert data["resumeInfo"]["fileName"] == "jane.txt"
        assert resume_store.get("jane.txt").id == data["resumeInfo"]["resumeId"]

    def test_rejects_unsupported_type(self, resume_store):
        response = client.post(
            "/resume/upload",
            files={"resume_file": ("resume.rtf", b"{\\rtf1 hello}", "application/rtf")},
            data={"job_description": SAMPLE_JD},
        )
        assert response.status_code == 400
        assert response.json()["success"] is False
        assert resume_store.list_originals() == []

    def test_rejects_oversized_file(self, resume_store, monkeypatch):
        monkeypatch.setattr(settings, "max_upload_size_mb", 0)
        response = client.post(
            "/resume/upload-only",
            files={"resume_file": ("jane.txt", SAMPLE_RESUME.encode(), "text/plain")},
        )
        assert response.status_code == 400
        assert "too large" in response.json()["data"]

    def test_rejects_empty_file(self, resume_store):
        response = client.post(
            "/resume/upload-only",
            files={"resume_file": ("jane.txt", b"   \n", "text/plain")},
        )
        assert response.status_code == 400

    def test_upload_only_then_history(self, resume_store):
        response = client.post(
            "/resume/upload-only",
            files={"resume_file": ("jane.txt", SAMPLE_RESUME.encode(), "text/plain")},
        )
        assert response.status_code == 201
        resume_id = response.json()["data"]["resumeId"]

        history = client.get("/resume/history").json()["data"]
        assert len(history) == 1
        assert history[0]["id"] == resume_id
        assert history[0]["fileName"] == "jane.txt"
        assert history[0]["hasOptimizedVersion"] is False


class TestResumeStructure:
    def test_structure(self):
        response = client.post("/resume/structure", json={"resumeText": SAMPLE_RESUME})
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["document"]["personalInfo"]["name"] == "Jane Doe"
        assert data["experience"] == [
            {
                "title": "Senior Engineer",
                "company": "Acme Corp",
                "duration": "2020 - Present",
                "bullets": ["Built systems"],
            }
        ]
        assert data["atsCompatibility"]["missingSections"]["skills"] is True

    def test_empty_text(self):
        response = client.post("/resume/structure", json={"resumeText": "   "})
        assert response.status_code == 400
        assert response.json()["data"] == "Resume text is empty"


class TestGenerateATSResume:
    BODY = {
        "resumeText": SAMPLE_RESUME,
        "jobDescription": SAMPLE_JD,
        "comparisonResult": {"matchedSkills": ["Python"], "missingSkills": ["Kubernetes", "Redis"]},
        "resumeFileName": "jane.txt",
    }

    def test_generate_and_store(self, resume_store):
        resume_store.store("jane.txt", SAMPLE_RESUME)
        with _patch_text("JANE DOE\nSKILLS\nPython, Kubernetes"):
            response = client.post("/resume/generate-ats", json=self.BODY)
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["optimizedResume"] == "JANE DOE\nSKILLS\nPython, Kubernetes"
        assert data["incorporation"] == {
            "incorporatedSkills": ["Kubernetes"],
            "remainingMissingSkills": ["Redis"],
            "incorporationRate": 50,
        }
        assert resume_store.get_optimized("jane.txt") is not None

        history = client.get("/resume/history").json()["data"]
        assert history[0]["hasOptimizedVersion"] is True
        assert history[0]["optimizedResumeId"].startswith("optimized_")

    def test_short_job_description(self, resume_store):
        body = dict(self.BODY, jobDescription="Python dev")
        response = client.post("/resume/generate-ats", json=body)
        assert response.status_code == 400
        assert resume_store.get_optimized("jane.txt") is None


class TestCleanup:
    def test_cleanup(self, resume_store):
        record = resume_store.store("jane.txt", SAMPLE_RESUME)
        response = client.post("/resume/cleanup", json={"resumeId": record.id})
        assert response.status_code == 200
        assert response.json()["data"] == {"cleaned": True}
        assert resume_store.get("jane.txt") is None

        again = client.post("/resume/cleanup", json={"resumeId": record.id})
        assert again.json()["data"] == {"cleaned": False}


class TestAnalyzeStoredResume:
    def test_by_id(self, resume_store):
        record = resume_store.store("jane.txt", SAMPLE_RESUME)
        with _patch_json(COMPARISON):
            response = client.post(
                "/resume/analyze", json={"resumeId": record.id, "jobDescription": SAMPLE_JD}
            )
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Resume analyzed successfully"
        assert body["data"]["analysisResult"]["matchedSkills"] == ["Python"]
        assert body["data"]["resumeText"] == SAMPLE_RESUME

    def test_by_file_name(self, resume_store):
        resume_store.store("jane.txt", SAMPLE_RESUME)
        with _patch_json(COMPARISON):
            response = client.post(
                "/resume/analyze", json={"resumeId": "jane.txt", "jobDescription": SAMPLE_JD}
            )
        assert response.status_code == 200
        assert response.json()["data"]["analysisResult"]["missingSkills"] == ["Kubernetes"]

    def test_unknown_resume(self, resume_store):
        response = client.post(
            "/resume/analyze", json={"resumeId": "resume_missing", "jobDescription": SAMPLE_JD}
        )
        assert response.status_code == 404
        assert response.json() == {"success": False, "data": "Resume not found"}

    def test_model_error_is_bad_request(self, resume_store):
        record = resume_store.store("jane.txt", SAMPLE_RESUME)
        with _patch_json({"error": "Job description is missing or insufficient"}):
            response = client.post(
                "/resume/analyze", json={"resumeId": record.id, "jobDescription": SAMPLE_JD}
            )
        assert response.status_code == 400
