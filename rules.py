from dataclasses import dataclass, field
from typing import List

from config import SIMULATED_GUIDELINE_TYPES
from schemas import CancerTreatmentOutput

NO_REFERENCES = ("N/A", "No specific references extracted.")


@dataclass
class GuidelineSelection:
    content: str
    used_files: List[str] = field(default_factory=list)


def simulated_content(cancer_type):
    return (
        f"Simulated NCCN (or equivalent) guideline content for {cancer_type} is being used. "
        "Base recommendation strictly on this content. If this simulated content is insufficient, state so. "
        "Focus on identifying direct quotes or section references if possible."
    )


def unavailable_content(cancer_type):
    return (
        f"No guideline document currently available for {cancer_type}. State that a recommendation cannot be "
        f"provided due to lack of specific guidelines for {cancer_type}."
    )


def placeholder_content(cancer_type):
    return (
        f"Placeholder: No specific PDF uploaded or content not extracted for '{cancer_type}' cancer types. "
        "The AI should state that it cannot provide a recommendation without a relevant guideline document "
        f"for the specified '{cancer_type}' cancer type."
    )


def resolve_guideline(cancer_type, library):
    """Pick the guideline text a treatment flow will be given for this cancer type."""

    # ---------------- UPLOADED ----------------
    content = library.consolidated_content(cancer_type)
    if content:
        return GuidelineSelection(content=content, used_files=library.file_names(cancer_type))

    # ---------------- SIMULATED ----------------
    if cancer_type in SIMULATED_GUIDELINE_TYPES:
        return GuidelineSelection(content=simulated_content(cancer_type))

    # ---------------- UNAVAILABLE ----------------
    if cancer_type == "Other":
        return GuidelineSelection(content=placeholder_content(cancer_type))
    return GuidelineSelection(content=unavailable_content(cancer_type))


def is_placeholder(content, cancer_type):
    """True when the guideline text says there is nothing to base a recommendation on."""
    text = content.strip()
    if text.startswith("Placeholder:"):
        return True
    return f"No guideline document currently available for {cancer_type}" in text


def unavailable_output(cancer_type):
    return CancerTreatmentOutput(
        recommendation=(
            f"No specific guideline document is currently available for {cancer_type} to generate a treatment "
            f"recommendation. Please upload the relevant NCCN (or equivalent) guidelines for {cancer_type}."
        ),
        references="N/A",
        no_recommendation_reason=(
            f"Guideline document for {cancer_type} is unavailable or a placeholder was provided."
        ),
    )


def model_failure_output(cancer_type):
    reason = "AI model processing error." if cancer_type == "Other" else "Error in AI model processing."
    return CancerTreatmentOutput(
        recommendation="Failed to generate a recommendation. The AI model may have not returned the expected output.",
        references="N/A",
        no_recommendation_reason=reason,
    )


def has_references(references):
    return bool(references and references.strip() and references.strip() not in NO_REFERENCES)
