import logging

import streamlit as st
from openai import OpenAIError
from pydantic import ValidationError

import form_options
from audit import AuditTrail
from config import MAX_NOTE_LENGTH
from flows import assess_case, notice_for
from guidelines import GuidelineError, GuidelineLibrary, process_upload
from logging_config import setup_logging
from rules import has_references
from schemas import CaseDetails

setup_logging()
logger = logging.getLogger("app")

FIELD_LABELS = {
    "diagnostic_confirmation": "Diagnostic Confirmation",
    "staging_evaluation": "Staging Evaluation",
    "disease_extent": "Disease Extent",
    "surgical_procedure": "Surgical Procedure",
    "lymph_node_assessment": "Lymph Node Assessment",
    "post_surgery_analysis": "Post-Surgery Analysis",
    "tumor_type": "Tumor Type",
    "grade": "Grade",
    "t_stage": "T Stage",
    "n_stage": "N Stage",
    "tumor_sidedness": "Tumor Sidedness",
    "kras_nras_hras_status": "KRAS/NRAS/HRAS Status",
    "braf_status": "BRAF Status",
    "her2_status": "HER2 Status",
    "msi_status": "MSI / MMR Status",
    "ntrk_fusion_status": "NTRK Fusion Status",
    "treatment_intent": "Treatment Intent",
}

# -------------------- SESSION STATE --------------------
if "library" not in st.session_state:
    st.session_state.library = GuidelineLibrary()

if "audit_trail" not in st.session_state:
    st.session_state.audit_trail = AuditTrail()

if "result" not in st.session_state:
    st.session_state.result = None

library = st.session_state.library
audit_trail = st.session_state.audit_trail

# -------------------- UI --------------------
st.set_page_config(page_title="OncoAssist")

page = st.sidebar.radio(
    "Navigate",
    ["Case Assessment", "Document Upload", "Audit Trail", "Accepted Recommendations"],
)
st.sidebar.caption("Recommendations are drawn only from the guideline documents provided.")


def select(field, options, key_prefix):
    return st.selectbox(
        FIELD_LABELS[field],
        form_options.values(options),
        format_func=lambda v: form_options.label_for(options, v),
        key=f"{key_prefix}_{field}",
    )


def show_references(references):
    if has_references(references):
        st.text_area("Guideline References", references, height=160, disabled=True)
    else:
        st.caption("No specific references were extracted.")


# ============================================================
# CASE ASSESSMENT
# ============================================================
if page == "Case Assessment":
    st.title("OncoAssist")
    st.caption("Guideline-based treatment recommendations for oncology cases.")

    cancer_type = st.selectbox(
        "Cancer Type",
        form_options.CANCER_TYPES,
        format_func=lambda v: form_options.label_for(form_options.cancer_type_options, v),
    )
    fields = form_options.options_for(cancer_type)
    form = {"cancer_type": cancer_type}

    # ---------------- CASE DETAILS ----------------
    col1, col2 = st.columns(2)
    for i, (field, options) in enumerate(fields.items()):
        with (col1 if i % 2 == 0 else col2):
            form[field] = select(field, options, cancer_type)

    if form["t_stage"] == "T3" and form["n_stage"] == "N0":
        form["vascular_lymphatic_invasion"] = st.toggle("Vascular/Lymphatic Invasion present")

    # ---------------- METASTATIC COLON ----------------
    if cancer_type == "Colon Cancer" and form["disease_extent"] == "Metastatic":
        st.write("### Metastatic Disease Details")
        col1, col2 = st.columns(2)
        for i, (field, options) in enumerate(form_options.METASTATIC_COLON_FIELDS.items()):
            with (col1 if i % 2 == 0 else col2):
                form[field] = select(field, options, "metastatic")
        form["is_surgery_feasible"] = st.toggle("Surgery of metastases feasible")
        form["is_fit_for_intensive_therapy"] = st.toggle("Fit for intensive therapy")

    col1, col2 = st.columns(2)

    # -------- SUBMIT BUTTON --------
    with col1:
        if st.button("Get Recommendation"):
            try:
                case = CaseDetails(**form)
            except ValidationError as e:
                st.error("Please check the case details:")
                st.code(str(e))
            else:
                status = st.status("Reviewing guidelines...", expanded=False)
                try:
                    output, entry = assess_case(case, library, audit_trail)
                except OpenAIError as e:
                    logger.exception("Error generating recommendation")
                    status.update(label="Failed", state="error")
                    st.error("Failed to generate treatment recommendation. Please try again.")
                    st.code(str(e))
                else:
                    status.update(label="Recommendation ready", state="complete")
                    st.session_state.result = {"output": output, "entry_id": entry.id}

    # -------- CLEAR BUTTON --------
    with col2:
        if st.button("Clear"):
            st.session_state.result = None
            st.rerun()

    # -------------------- DISPLAY --------------------
    if st.session_state.result:
        entry = audit_trail.get(st.session_state.result["entry_id"])
        notice = notice_for(st.session_state.result["output"])

        if entry.no_recommendation_reason:
            st.warning(f"**{notice.title}**: {notice.description}")
        else:
            st.success(notice.description)

        st.write(f"### Treatment Recommendation ({entry.cancer_type})")
        st.write(entry.recommendation)
        show_references(entry.references)
        if entry.used_guideline_files:
            st.caption("Guideline files: " + ", ".join(entry.used_guideline_files))

        # ---------------- ACCEPT ----------------
        if entry.is_accepted:
            st.success("Recommendation accepted.")
        else:
            with st.form("accept_form"):
                note = st.text_area("Doctor's Note (optional)", max_chars=MAX_NOTE_LENGTH)
                if st.form_submit_button("Accept Recommendation"):
                    audit_trail.accept(entry.id, note)
                    st.rerun()


# ============================================================
# DOCUMENT UPLOAD
# ============================================================
elif page == "Document Upload":
    st.title("Guideline Documents")
    st.caption("Uploading a document replaces the one stored for that cancer type.")

    cancer_type = st.selectbox(
        "Cancer Type",
        form_options.CANCER_TYPES,
        format_func=lambda v: form_options.label_for(form_options.cancer_type_options, v),
        key="upload_cancer_type",
    )
    uploaded = st.file_uploader("Guideline document", type=["pdf", "txt", "md"])

    if st.button("Process Document"):
        if uploaded is None:
            st.warning("Please choose a file")
        else:
            try:
                document = process_upload(uploaded.name, uploaded.getvalue(), cancer_type)
            except GuidelineError as e:
                st.error(str(e))
            else:
                displaced = library.add(cancer_type, document)
                if displaced:
                    st.success(
                        f"Guideline document for {cancer_type} ({document.file_name}) has been updated, "
                        f'replacing "{displaced.file_name}".'
                    )
                else:
                    st.success(f'New guideline document for {cancer_type} ("{document.file_name}") processed and stored.')

    # ---------------- STATUS ----------------
    st.write("### Stored Guidelines")
    for ct in form_options.CANCER_TYPES:
        docs = library.documents(ct)
        if docs:
            for d in docs:
                st.write(f"**{ct}**: {d.file_name} (processed {d.processed_at:%Y-%m-%d %H:%M:%S})")
                st.caption(d.preview)
        else:
            st.write(f"**{ct}**: no document uploaded")


# ============================================================
# AUDIT TRAIL
# ============================================================
elif page == "Audit Trail":
    st.title("Audit Trail")
    entries = audit_trail.entries()

    if not entries:
        st.info("No cases assessed in this session.")
    else:
        st.dataframe(
            [
                {
                    "Timestamp": f"{e.timestamp:%Y-%m-%d %H:%M:%S}",
                    "Cancer Type": e.cancer_type,
                    "T/N": f"{e.t_stage}/{e.n_stage}",
                    "Status": "Accepted" if e.is_accepted else "Pending",
                    "Recommendation": e.recommendation_snippet,
                }
                for e in entries
            ],
            hide_index=True,
        )

        for e in entries:
            with st.expander(f"{e.timestamp:%Y-%m-%d %H:%M:%S} | {e.cancer_type} | {e.t_stage}/{e.n_stage}"):
                st.json(e.model_dump(mode="json", exclude={"recommendation_snippet"}))


# ============================================================
# ACCEPTED RECOMMENDATIONS
# ============================================================
else:
    st.title("Accepted Recommendations")
    accepted = audit_trail.accepted()

    if not accepted:
        st.info("No recommendations have been accepted yet.")

    for e in accepted:
        st.write(f"### {e.cancer_type} ({e.t_stage}/{e.n_stage})")
        st.caption(f"Accepted {e.accepted_at:%Y-%m-%d %H:%M:%S}")
        if e.doctors_note:
            st.info(f"Doctor's note: {e.doctors_note}")
        st.write(e.recommendation)
        show_references(e.references)
        if e.used_guideline_files:
            st.caption("Guideline files: " + ", ".join(e.used_guideline_files))
        st.divider()
