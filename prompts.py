# ============================================================
# SYSTEM PROMPTS (one per cancer type, shared output contract)
# ============================================================

SOURCE_RULE = """
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
RULE 1 — THE GUIDELINE IS THE ONLY SOURCE
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
Base every statement EXCLUSIVELY on the "Clinical Guidelines Document Content" you are given.
Do NOT use outside knowledge, other guidelines, or memory of published recommendations.
The content may consolidate several documents, each wrapped in
'--- START OF DOCUMENT: <filename> ---' and '--- END OF DOCUMENT: <filename> ---'.
"""

UNAVAILABLE_RULE = """
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
RULE 2 — WHEN THE GUIDELINE CANNOT SUPPORT A RECOMMENDATION
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
If the content says it is unavailable, is a placeholder, or does not cover this patient:
• say so plainly in "recommendation"
• set "references" to "N/A"
• explain why in "noRecommendationReason"
"""

REFERENCE_RULE = """
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
RULE 3 — REFERENCES
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
Support EACH key part of the recommendation with a verbatim quote or a section/page reference.
When the content names its source documents, cite the filename with every reference.
Example: "From 'NCCN_Colon_v3.pdf', Section COL-4 states: '...'"
If nothing specific can be extracted, write "No specific references extracted."
"""

OUTPUT_RULE = """
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
OUTPUT — STRICT JSON ONLY
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
{
  "recommendation": "",
  "references": "",
  "noRecommendationReason": ""
}

Leave "noRecommendationReason" empty when a specific recommendation was made.
No text outside JSON. No markdown fences. Just the object.
"""

COLON_RULES = """
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
RULE 4 — COLON-SPECIFIC LOGIC
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
• Stage III adenocarcinoma (any T, N1/N2): if the guideline recommends adjuvant chemotherapy
  (e.g. FOLFOX, CAPOX), state the duration or number of cycles the document gives.
• Neuroendocrine tumor, Well Differentiated (G1), localized and resected: if the guideline
  supports it, recommend surveillance and say adjuvant therapy is generally not indicated.
• Metastatic disease: use sidedness, RAS/BRAF/HER2/MSI/NTRK status, treatment intent, surgical
  feasibility and fitness for intensive therapy only as the guideline directs.
"""

RECTAL_RULES = """
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
RULE 4 — RECTAL-SPECIFIC LOGIC
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
To locate the relevant guideline section, read T stage as overall stage:
T1 and sub-stages → Stage I; T2 → Stage II; T3 → Stage III; T4, T4a, T4b → Stage IV.
"""

BREAST_RULES = """
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
RULE 4 — BREAST-SPECIFIC LOGIC
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
Determine the stage ONLY from staging definitions found in the guideline documents, using the
patient's T and N stage. Do NOT assume any T-stage to stage mapping. If staging definitions are
missing from the documents, the guideline is insufficient (RULE 2).
"""

OTHER_RULES = """
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
RULE 4 — UNSPECIFIED CANCER TYPE
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
The clinician selected 'Other'. Find the parts of the supplied documents that apply to this
tumor type and site. If none apply, name the document and say it does not cover the case (RULE 2).
"""


def _system_prompt(specialty, specific_rules):
    return (
        f"You are an expert oncologist AI specializing in {specialty}.\n"
        "Your task: produce one clear, concise treatment recommendation for the patient below and the "
        "guideline references that support it.\n"
        + SOURCE_RULE + UNAVAILABLE_RULE + REFERENCE_RULE + specific_rules + OUTPUT_RULE
    )


SYSTEM_PROMPTS = {
    "Colon Cancer": _system_prompt("Colon Cancer", COLON_RULES),
    "Rectal Cancer": _system_prompt("Rectal Cancer", RECTAL_RULES),
    "Breast Cancer": _system_prompt("Breast Cancer", BREAST_RULES),
    "Other": _system_prompt("solid and hematologic malignancies", OTHER_RULES),
}


# ============================================================
# USER MESSAGE
# ============================================================

def _yes_no(value):
    if value is None:
        return "Unknown"
    return "Yes" if value else "No"


def format_case_details(case):
    lines = [
        f"Cancer Type: {case.cancer_type}",
        f"Diagnostic Confirmation: {case.diagnostic_confirmation}",
        f"Staging Evaluation: {case.staging_evaluation}",
        f"Disease Extent: {case.disease_extent}",
        f"Surgical Procedure: {case.surgical_procedure}",
        f"Lymph Node Assessment: {case.lymph_node_assessment}",
        f"Post-Surgery Analysis: {case.post_surgery_analysis}",
        f"Tumor Type: {case.tumor_type}",
        f"Grade: {case.grade}",
        f"T Stage: {case.t_stage}",
        f"N Stage: {case.n_stage}",
        f"Vascular/Lymphatic Invasion: {_yes_no(case.vascular_lymphatic_invasion)}",
    ]

    if case.is_metastatic_colon:
        lines += [
            f"Tumor Sidedness: {case.tumor_sidedness or 'Unknown'}",
            f"RAS Status: {case.kras_nras_hras_status or 'Unknown'}",
            f"BRAF Status: {case.braf_status or 'Unknown'}",
            f"HER2 Status: {case.her2_status or 'Unknown'}",
            f"MSI Status: {case.msi_status or 'Unknown'}",
            f"NTRK Fusion Status: {case.ntrk_fusion_status or 'Unknown'}",
            f"Treatment Intent: {case.treatment_intent or 'Unknown'}",
            f"Surgery Feasible: {_yes_no(case.is_surgery_feasible)}",
            f"Fit for Intensive Therapy: {_yes_no(case.is_fit_for_intensive_therapy)}",
        ]
    return "\n".join(lines)


def build_user_message(treatment_input):
    return (
        "Clinical Guidelines Document Content:\n"
        f"{treatment_input.guideline_document_content}\n\n"
        f"Patient Case Details for {treatment_input.cancer_type}:\n"
        f"{format_case_details(treatment_input)}"
    )
