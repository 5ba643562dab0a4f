import httpx
import pytest
from openai import APIConnectionError

import flows
import prompts
import rules
from guidelines import process_upload
from schemas import CaseDetails, TreatmentInput


def _input(fields, content):
    case = CaseDetails(**fields)
    return TreatmentInput(**case.case_fields(), guideline_document_content=content)


def test_colon_flow_calls_model(fake_openai, colon_fields):
    out = flows.diagnose_colon_cancer(_input(colon_fields, "COL-4: adjuvant FOLFOX"))
    assert out.recommendation == "Adjuvant FOLFOX for 6 months."
    assert out.no_recommendation_reason is None

    call = fake_openai.calls[0]
    assert call["response_format"] == {"type": "json_object"}
    assert call["messages"][0]["content"] == prompts.SYSTEM_PROMPTS["Colon Cancer"]
    assert "COL-4: adjuvant FOLFOX" in call["messages"][1]["content"]
    assert "Patient Case Details for Colon Cancer:" in call["messages"][1]["content"]


@pytest.mark.parametrize("fixture,flow", [
    ("breast_fields", flows.diagnose_breast_cancer),
    ("other_fields", flows.diagnose_other_cancer),
])
def test_placeholder_skips_model(request, fake_openai, library, fixture, flow):
    fields = request.getfixturevalue(fixture)
    content = rules.resolve_guideline(fields["cancer_type"], library).content
    out = flow(_input(fields, content))
    assert out == rules.unavailable_output(fields["cancer_type"])
    assert fake_openai.calls == []


def test_flow_rejects_other_cancer_type(fake_openai, colon_fields):
    with pytest.raises(ValueError):
        flows.diagnose_breast_cancer(_input(colon_fields, "text"))


@pytest.mark.parametrize("raw", ["", "not json", '{"references": "x"}', '{"recommendation": "   "}'])
def test_unusable_reply_becomes_failure_output(fake_openai, colon_fields, raw):
    fake_openai.reply(raw)
    out = flows.diagnose_colon_cancer(_input(colon_fields, "COL-4"))
    assert out == rules.model_failure_output("Colon Cancer")


def test_run_treatment_flow_dispatch(fake_openai, other_fields, library):
    library.add("Other", process_upload("melanoma.txt", b"ME-1", "Other"))
    content = rules.resolve_guideline("Other", library).content
    flows.run_treatment_flow(_input(other_fields, content))
    assert fake_openai.calls[0]["messages"][0]["content"] == prompts.SYSTEM_PROMPTS["Other"]


def test_run_treatment_flow_unknown_type(colon_fields):
    ti = TreatmentInput.model_construct(**{**colon_fields, "cancer_type": "Lung Cancer"},
                                        guideline_document_content="x")
    with pytest.raises(ValueError, match="Unsupported cancer type"):
        flows.run_treatment_flow(ti)


def test_case_details_in_prompt(metastatic_colon_fields):
    text = prompts.format_case_details(CaseDetails(**metastatic_colon_fields))
    assert "T Stage: T3" in text
    assert "Vascular/Lymphatic Invasion: No" in text
    assert "Tumor Sidedness: Left" in text
    assert "Surgery Feasible: No" in text


def test_metastatic_details_omitted_for_localized(colon_case):
    text = prompts.format_case_details(colon_case)
    assert "Tumor Sidedness" not in text


def test_assess_case_records_audit_entry(fake_openai, colon_case, library, audit_trail):
    library.add("Colon Cancer", process_upload("nccn_colon.txt", b"COL-4", "Colon Cancer"))
    output, entry = flows.assess_case(colon_case, library, audit_trail)
    assert entry.recommendation == output.recommendation
    assert entry.used_guideline_files == ["nccn_colon.txt"]
    assert entry.t_stage == "T3"
    assert len(audit_trail) == 1


def test_assess_case_simulated_guideline(fake_openai, colon_case, library, audit_trail):
    _, entry = flows.assess_case(colon_case, library, audit_trail)
    assert entry.used_guideline_files == []
    assert rules.simulated_content("Colon Cancer") in fake_openai.calls[0]["messages"][1]["content"]


def test_assess_case_model_error_records_nothing(fake_openai, colon_case, library, audit_trail):
    fake_openai.fail(APIConnectionError(request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions")))
    with pytest.raises(APIConnectionError):
        flows.assess_case(colon_case, library, audit_trail)
    assert len(audit_trail) == 0


def test_notice_for():
    assert flows.notice_for(rules.unavailable_output("Breast Cancer")).title == "Guideline Information"
    assert flows.notice_for(rules.model_failure_output("Colon Cancer")).title == "Guideline Information"
    assert flows.notice_for(flows.parse_model_output('{"recommendation": "Surveillance."}', "Colon Cancer")).title == (
        "Recommendation Generated"
    )


def test_hidden_vascular_invasion_not_in_prompt(colon_fields):
    case = CaseDetails(**colon_fields, vascular_lymphatic_invasion=True)  # T3/N1a
    assert "Vascular/Lymphatic Invasion: No" in prompts.format_case_details(case)
