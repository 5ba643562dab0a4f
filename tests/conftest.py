import ipaddress
import json
from types import SimpleNamespace

import pytest
import requests

import flows
from audit import AuditTrail
from guidelines import GuidelineLibrary
from schemas import CaseDetails


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeOpenAI:
    """Stands in for openai.OpenAI; only chat.completions.create is used."""

    def __init__(self):
        self.completions = FakeCompletions()
        self.chat = SimpleNamespace(completions=self.completions)

    def reply(self, payload):
        self.completions.content = payload if isinstance(payload, str) else json.dumps(payload)
        self.completions.error = None

    def fail(self, error):
        self.completions.error = error

    @property
    def calls(self):
        return self.completions.calls


@pytest.fixture
def fake_openai(monkeypatch):
    client = FakeOpenAI()
    client.reply({
        "recommendation": "Adjuvant FOLFOX for 6 months.",
        "references": "From 'nccn_colon.txt', COL-4: 'Stage III: adjuvant chemotherapy'",
        "noRecommendationReason": "",
    })
    monkeypatch.setattr(flows, "get_client", lambda: client)
    return client


@pytest.fixture
def colon_fields():
    return {
        "cancer_type": "Colon Cancer",
        "diagnostic_confirmation": "Biopsy-Proven",
        "staging_evaluation": "Completed",
        "disease_extent": "Localized",
        "surgical_procedure": "Right Hemicolectomy",
        "lymph_node_assessment": "At least 12 nodes collected and analyzed",
        "post_surgery_analysis": "Final pathology/biopsy report generated",
        "tumor_type": "Adenocarcinoma",
        "grade": "Moderately Differentiated (G2)",
        "t_stage": "T3",
        "n_stage": "N1a",
    }


@pytest.fixture
def metastatic_colon_fields(colon_fields):
    return {
        **colon_fields,
        "disease_extent": "Metastatic",
        "tumor_sidedness": "Left",
        "kras_nras_hras_status": "Wild Type",
        "braf_status": "Wild Type",
        "her2_status": "Negative",
        "msi_status": "MSI-Low or Stable",
        "ntrk_fusion_status": "Negative",
        "treatment_intent": "Palliative",
        "is_surgery_feasible": False,
        "is_fit_for_intensive_therapy": True,
    }


@pytest.fixture
def breast_fields():
    return {
        "cancer_type": "Breast Cancer",
        "diagnostic_confirmation": "Biopsy-Proven",
        "staging_evaluation": "Completed",
        "disease_extent": "Localized",
        "surgical_procedure": "Lumpectomy with SLNB",
        "lymph_node_assessment": "Sentinel Lymph Node Biopsy (SLNB) performed",
        "post_surgery_analysis": "Final pathology/biopsy report generated",
        "tumor_type": "Invasive Ductal Carcinoma (IDC)",
        "grade": "Nottingham Grade 2 (Intermediate Grade)",
        "t_stage": "T1c",
        "n_stage": "pN0",
    }


@pytest.fixture
def other_fields():
    return {
        "cancer_type": "Other",
        "diagnostic_confirmation": "Biopsy-Proven",
        "staging_evaluation": "Completed",
        "disease_extent": "Localized",
        "surgical_procedure": "Excisional Biopsy",
        "lymph_node_assessment": "No nodes assessed",
        "post_surgery_analysis": "Final pathology/biopsy report generated",
        "tumor_type": "Melanoma",
        "grade": "Not Applicable",
        "t_stage": "T2",
        "n_stage": "N0",
    }


@pytest.fixture
def colon_case(colon_fields):
    return CaseDetails(**colon_fields)


@pytest.fixture
def library():
    return GuidelineLibrary()


@pytest.fixture
def audit_trail():
    return AuditTrail()


@pytest.fixture
def public_dns(monkeypatch):
    """Resolve every host name to a public address without touching the network."""
    import socket

    import guidelines

    real_getaddrinfo = socket.getaddrinfo

    def fake_getaddrinfo(host, port, *args, **kwargs):
        try:
            ipaddress.ip_address(host)
        except ValueError:
            return [(socket.AF_INET, socket.SOCK_STREAM, 6, "", ("93.184.216.34", port or 0))]
        return real_getaddrinfo(host, port, *args, **kwargs)

    monkeypatch.setattr(guidelines.socket, "getaddrinfo", fake_getaddrinfo)


class FakeResponse:
    """The parts of requests.Response the guideline fetch reads."""

    def __init__(self, body, status=200, content_type="text/plain; charset=utf-8", location=None):
        self.content = body.encode("utf-8") if isinstance(body, str) else body
        self.status_code = status
        self.headers = {"Content-Type": content_type}
        if location:
            self.headers["Location"] = location
        self.is_redirect = location is not None

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")
