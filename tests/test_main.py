import httpx
import pytest
from fastapi.testclient import TestClient
from openai import APIConnectionError

import guidelines
import main
from conftest import FakeResponse


@pytest.fixture
def client():
    main.library.clear()
    main.audit_trail.clear()
    return TestClient(main.app)


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_options(client):
    types = [o["value"] for o in client.get("/options").json()["cancer_types"]]
    assert types == ["Colon Cancer", "Rectal Cancer", "Breast Cancer", "Other"]

    colon = client.get("/options/Colon Cancer").json()
    assert "t_stage" in colon["fields"]
    assert "braf_status" in colon["metastatic_colon_fields"]
    assert client.get("/options/Breast Cancer").json()["metastatic_colon_fields"] == {}


def test_options_unknown_type(client):
    assert client.get("/options/Lung Cancer").status_code == 404


def test_upload_then_replace(client):
    r = client.post("/guidelines/upload", data={"cancer_type": "Colon Cancer"},
                    files={"file": ("v1.txt", b"COL-4 old", "text/plain")})
    assert r.status_code == 200
    assert r.json()["notice"]["title"] == "Document Processed"
    assert r.json()["replaced"] is None

    r = client.post("/guidelines/upload", data={"cancer_type": "Colon Cancer"},
                    files={"file": ("v2.pdf", b"%PDF", "application/pdf")})
    body = r.json()
    assert body["notice"]["title"] == "Document Updated"
    assert body["replaced"] == "v1.txt"
    assert body["document"]["preview"].startswith('Simulated content from "v2.pdf"')
    assert "content" not in body["document"]
    assert client.get("/guidelines").json() == {"documents": {"Colon Cancer": ["v2.pdf"]}}


def test_upload_unsupported_file(client):
    r = client.post("/guidelines/upload", data={"cancer_type": "Breast Cancer"},
                    files={"file": ("g.docx", b"data", "application/octet-stream")})
    assert r.status_code == 400


def test_upload_unknown_cancer_type(client):
    r = client.post("/guidelines/upload", data={"cancer_type": "Lung Cancer"},
                    files={"file": ("g.txt", b"data", "text/plain")})
    assert r.status_code == 422


def test_text_guideline_appended(client):
    client.post("/guidelines/text", json={"cancer_type": "Other", "file_name": "a.txt", "content": "A"})
    r = client.post("/guidelines/text",
                    json={"cancer_type": "Other", "file_name": "b.txt", "content": "B", "replace": False})
    assert r.json()["replaced"] is None
    assert main.library.file_names("Other") == ["a.txt", "b.txt"]


def test_fetch_guideline_failure(client, monkeypatch, public_dns):
    def fake_get(url, **kwargs):
        raise guidelines.requests.ConnectionError("refused")

    monkeypatch.setattr(guidelines.requests, "get", fake_get)
    r = client.post("/guidelines/fetch", json={"cancer_type": "Breast Cancer", "url": "https://example.org/b.txt"})
    assert r.status_code == 502


def test_fetch_guideline_returns_preview_only(client, monkeypatch, public_dns):
    body_text = "BINV-1 " + "x" * 500
    monkeypatch.setattr(guidelines.requests, "get", lambda url, **kw: FakeResponse(body_text))
    r = client.post("/guidelines/fetch", json={"cancer_type": "Breast Cancer", "url": "https://example.org/b.txt"})
    assert r.status_code == 200
    document = r.json()["document"]
    assert document["file_name"] == "b.txt"
    assert document["preview"] == body_text[:100] + "..."
    assert "content" not in document
    assert main.library.documents("Breast Cancer")[0].content == body_text


def test_fetch_link_local_url_refused(client, monkeypatch):
    def fake_get(url, **kwargs):
        raise AssertionError("request must not be sent")

    monkeypatch.setattr(guidelines.requests, "get", fake_get)
    r = client.post("/guidelines/fetch",
                    json={"cancer_type": "Colon Cancer", "url": "http://169.254.169.254/latest/meta-data/iam"})
    assert r.status_code == 400
    assert main.library.status() == {}



def test_assess_with_uploaded_guideline(client, fake_openai, colon_fields):
    client.post("/guidelines/text", json={"cancer_type": "Colon Cancer", "file_name": "nccn.txt", "content": "COL-4"})
    r = client.post("/assess", json=colon_fields)
    assert r.status_code == 200
    body = r.json()
    assert body["output"]["recommendation"] == "Adjuvant FOLFOX for 6 months."
    assert body["entry"]["used_guideline_files"] == ["nccn.txt"]
    assert body["notice"]["title"] == "Recommendation Generated"


def test_assess_breast_without_guideline(client, fake_openai, breast_fields):
    body = client.post("/assess", json=breast_fields).json()
    assert body["notice"]["title"] == "Guideline Information"
    assert body["output"]["references"] == "N/A"
    assert fake_openai.calls == []
    assert len(client.get("/audit").json()) == 1


def test_assess_invalid_case(client, fake_openai, colon_fields):
    colon_fields["t_stage"] = "T9"
    assert client.post("/assess", json=colon_fields).status_code == 422


def test_assess_model_error(client, fake_openai, colon_fields):
    fake_openai.fail(APIConnectionError(request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions")))
    r = client.post("/assess", json=colon_fields)
    assert r.status_code == 502
    assert r.json()["detail"] == "Failed to generate treatment recommendation. Please try again."
    assert client.get("/audit").json() == []


def test_accept_flow(client, fake_openai, colon_fields):
    entry_id = client.post("/assess", json=colon_fields).json()["entry"]["id"]
    assert client.get("/accepted").json() == []

    r = client.post(f"/audit/{entry_id}/accept", json={"doctors_note": "Agreed."})
    assert r.json()["is_accepted"] is True
    assert r.json()["doctors_note"] == "Agreed."

    accepted = client.get("/accepted").json()
    assert [e["id"] for e in accepted] == [entry_id]
    assert client.get(f"/audit/{entry_id}").json()["accepted_at"] is not None


def test_unknown_audit_entry(client):
    assert client.get("/audit/missing").status_code == 404
    assert client.post("/audit/missing/accept", json={}).status_code == 404
