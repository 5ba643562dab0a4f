import logging
from typing import List

import uvicorn
from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from openai import OpenAIError

import form_options
from audit import AuditEntryNotFound, AuditTrail
from config import CORS_ORIGINS
from flows import assess_case, notice_for
from guidelines import GuidelineError, GuidelineFetchError, GuidelineLibrary, fetch_guideline, process_upload
from logging_config import setup_logging
from schemas import (
    AcceptRequest,
    AssessmentResponse,
    AuditEntry,
    CancerType,
    CaseDetails,
    GuidelineDocument,
    GuidelineDocumentSummary,
    GuidelineFetchRequest,
    GuidelineTextRequest,
    GuidelineUploadResponse,
    Notice,
)

setup_logging()
logger = logging.getLogger("main")

app = FastAPI(title="OncoAssist")
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

library = GuidelineLibrary()
audit_trail = AuditTrail()


@app.get("/health")
def health():
    return {"status": "ok"}


# ============================================================
# FORM OPTIONS
# ============================================================

@app.get("/options")
def list_cancer_types():
    return {"cancer_types": form_options.cancer_type_options}


@app.get("/options/{cancer_type}")
def get_form_options(cancer_type: str):
    try:
        fields = form_options.options_for(cancer_type)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown cancer type: {cancer_type}")
    return {
        "cancer_type": cancer_type,
        "fields": fields,
        "metastatic_colon_fields": form_options.METASTATIC_COLON_FIELDS if cancer_type == "Colon Cancer" else {},
    }


# ============================================================
# GUIDELINE DOCUMENTS
# ============================================================

def _store(cancer_type: str, document: GuidelineDocument, replace: bool) -> GuidelineUploadResponse:
    displaced = library.add(cancer_type, document, replace=replace)
    if displaced:
        notice = Notice(
            title="Document Updated",
            description=f"Guideline document for {cancer_type} ({document.file_name}) has been updated, "
                        f'replacing "{displaced.file_name}".',
        )
    else:
        notice = Notice(
            title="Document Processed",
            description=f'New guideline document for {cancer_type} ("{document.file_name}") processed and stored.',
        )
    return GuidelineUploadResponse(
        cancer_type=cancer_type,
        document=GuidelineDocumentSummary.of(document),
        replaced=displaced.file_name if displaced else None,
        notice=notice,
    )


@app.get("/guidelines")
def guideline_status():
    return {"documents": library.status()}


@app.post("/guidelines/upload", response_model=GuidelineUploadResponse)
async def upload_guideline(
    cancer_type: CancerType = Form(...),
    replace: bool = Form(True),
    file: UploadFile = File(...),
):
    data = await file.read()
    try:
        document = process_upload(file.filename or "upload", data, cancer_type)
    except GuidelineError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _store(cancer_type, document, replace)


@app.post("/guidelines/text", response_model=GuidelineUploadResponse)
def add_guideline_text(data: GuidelineTextRequest):
    try:
        document = process_upload(data.file_name, data.content.encode("utf-8"), data.cancer_type)
    except GuidelineError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _store(data.cancer_type, document, data.replace)


@app.post("/guidelines/fetch", response_model=GuidelineUploadResponse)
def fetch_guideline_document(data: GuidelineFetchRequest):
    try:
        document = fetch_guideline(data.url, data.cancer_type)
    except GuidelineFetchError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except GuidelineError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _store(data.cancer_type, document, data.replace)


# ============================================================
# ASSESSMENT
# ============================================================

@app.post("/assess", response_model=AssessmentResponse)
def assess(data: CaseDetails):
    try:
        output, entry = assess_case(data, library, audit_trail)
    except OpenAIError:
        logger.exception("Error generating recommendation")
        raise HTTPException(
            status_code=502,
            detail="Failed to generate treatment recommendation. Please try again.",
        )
    return AssessmentResponse(output=output, entry=entry, notice=notice_for(output))


# ============================================================
# AUDIT TRAIL
# ============================================================

@app.get("/audit", response_model=List[AuditEntry])
def list_audit_entries():
    return audit_trail.entries()


@app.get("/audit/{entry_id}", response_model=AuditEntry)
def get_audit_entry(entry_id: str):
    try:
        return audit_trail.get(entry_id)
    except AuditEntryNotFound:
        raise HTTPException(status_code=404, detail="Audit entry not found")


@app.post("/audit/{entry_id}/accept", response_model=AuditEntry)
def accept_recommendation(entry_id: str, data: AcceptRequest):
    try:
        return audit_trail.accept(entry_id, data.doctors_note)
    except AuditEntryNotFound:
        raise HTTPException(status_code=404, detail="Audit entry not found")


@app.get("/accepted", response_model=List[AuditEntry])
def list_accepted():
    return audit_trail.accepted()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
