"""
Treatment flows
===============
One flow per cancer type. Each flow decides whether the guideline text is
worth sending to the model, prompts the model with the case, and turns the
reply into a CancerTreatmentOutput.
"""

import json
import logging

from openai import OpenAI
from pydantic import ValidationError

import rules
from config import MODEL, OPENAI_API_KEY, TEMPERATURE
from prompts import SYSTEM_PROMPTS, build_user_message
from schemas import CancerTreatmentOutput, Notice, TreatmentInput

logger = logging.getLogger("flows")

_client = None


def get_client() -> OpenAI:
    global _client
    if _client is None:
        _client = OpenAI(api_key=OPENAI_API_KEY)
    return _client


def parse_model_output(raw, cancer_type) -> CancerTreatmentOutput:
    """Validate the model's JSON reply; anything unusable becomes the failure output."""
    if not raw or not raw.strip():
        logger.warning(f"{cancer_type}: model returned an empty reply")
        return rules.model_failure_output(cancer_type)
    try:
        return CancerTreatmentOutput.model_validate(json.loads(raw))
    except (json.JSONDecodeError, ValidationError) as e:
        logger.warning(f"{cancer_type}: model reply did not match the output schema: {e}. Raw[:200]: {raw[:200]}")
        return rules.model_failure_output(cancer_type)


def _run_flow(treatment_input: TreatmentInput, cancer_type: str) -> CancerTreatmentOutput:
    if treatment_input.cancer_type != cancer_type:
        raise ValueError(f"{cancer_type} flow received a {treatment_input.cancer_type} case")

    logger.info(f"start: {cancer_type} treatment flow")

    # Placeholder guideline content: answer without calling the model
    if rules.is_placeholder(treatment_input.guideline_document_content, cancer_type):
        logger.info(f"end: {cancer_type} treatment flow (guideline unavailable, model not called)")
        return rules.unavailable_output(cancer_type)

    response = get_client().chat.completions.create(
        model=MODEL,
        messages=[
            {"role": "system", "content": SYSTEM_PROMPTS[cancer_type]},
            {"role": "user", "content": build_user_message(treatment_input)},
        ],
        temperature=TEMPERATURE,
        response_format={"type": "json_object"},
    )
    raw = response.choices[0].message.content if response.choices else None
    output = parse_model_output(raw, cancer_type)

    logger.info(f"end: {cancer_type} treatment flow")
    return output


def diagnose_colon_cancer(treatment_input: TreatmentInput) -> CancerTreatmentOutput:
    return _run_flow(treatment_input, "Colon Cancer")


def diagnose_rectal_cancer(treatment_input: TreatmentInput) -> CancerTreatmentOutput:
    return _run_flow(treatment_input, "Rectal Cancer")


def diagnose_breast_cancer(treatment_input: TreatmentInput) -> CancerTreatmentOutput:
    return _run_flow(treatment_input, "Breast Cancer")


def diagnose_other_cancer(treatment_input: TreatmentInput) -> CancerTreatmentOutput:
    return _run_flow(treatment_input, "Other")


FLOWS = {
    "Colon Cancer": diagnose_colon_cancer,
    "Rectal Cancer": diagnose_rectal_cancer,
    "Breast Cancer": diagnose_breast_cancer,
    "Other": diagnose_other_cancer,
}


def run_treatment_flow(treatment_input: TreatmentInput) -> CancerTreatmentOutput:
    flow = FLOWS.get(treatment_input.cancer_type)
    if flow is None:
        raise ValueError(f"Unsupported cancer type: {treatment_input.cancer_type}")
    return flow(treatment_input)


# ============================================================
# SUBMIT PATH
# ============================================================

def assess_case(case, library, audit_trail):
    """
    Form -> guideline lookup -> model -> audit entry.

    Errors from the model service propagate and nothing is recorded.
    """
    selection = rules.resolve_guideline(case.cancer_type, library)
    treatment_input = TreatmentInput(**case.case_fields(), guideline_document_content=selection.content)

    output = run_treatment_flow(treatment_input)
    entry = audit_trail.record(case, output, selection.used_files)
    return output, entry


def notice_for(output: CancerTreatmentOutput) -> Notice:
    if output.no_recommendation_reason:
        return Notice(title="Guideline Information", description=output.no_recommendation_reason)
    return Notice(
        title="Recommendation Generated",
        description="Treatment recommendation has been successfully generated.",
    )
