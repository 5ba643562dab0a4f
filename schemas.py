from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

import form_options
from config import MAX_NOTE_LENGTH

CancerType = Literal["Colon Cancer", "Rectal Cancer", "Breast Cancer", "Other"]


class CaseDetails(BaseModel):
    """Case attributes entered by the clinician on the assessment form."""

    cancer_type: CancerType
    diagnostic_confirmation: str
    staging_evaluation: str
    disease_extent: str
    surgical_procedure: str
    lymph_node_assessment: str
    post_surgery_analysis: str

    # Report findings
    tumor_type: str
    grade: str
    t_stage: str
    n_stage: str
    vascular_lymphatic_invasion: bool = False

    # Metastatic colon cancer only
    tumor_sidedness: Optional[str] = None
    kras_nras_hras_status: Optional[str] = None
    braf_status: Optional[str] = None
    her2_status: Optional[str] = None
    msi_status: Optional[str] = None
    ntrk_fusion_status: Optional[str] = None
    treatment_intent: Optional[str] = None
    is_surgery_feasible: Optional[bool] = None
    is_fit_for_intensive_therapy: Optional[bool] = None

    @model_validator(mode="after")
    def check_against_form_options(self):
        for field, options in form_options.options_for(self.cancer_type).items():
            value = getattr(self, field)
            if value not in form_options.values(options):
                raise ValueError(f"{field}: {value!r} is not a valid option for {self.cancer_type}")

        if self.is_metastatic_colon:
            for field, options in form_options.METASTATIC_COLON_FIELDS.items():
                value = getattr(self, field)
                if value is not None and value not in form_options.values(options):
                    raise ValueError(f"{field}: {value!r} is not a valid option")
        else:
            for field in list(form_options.METASTATIC_COLON_FIELDS) + ["is_surgery_feasible",
                                                                     "is_fit_for_intensive_therapy"]:
                setattr(self, field, None)

        # only asked for T3/N0
        if not self.shows_vascular_invasion:
            self.vascular_lymphatic_invasion = False
        return self

    @property
    def shows_vascular_invasion(self) -> bool:
        return self.t_stage == "T3" and self.n_stage == "N0"

    @property
    def is_metastatic_colon(self) -> bool:
        return self.cancer_type == "Colon Cancer" and self.disease_extent == "Metastatic"

    def case_fields(self) -> dict:
        return self.model_dump(include=set(CaseDetails.model_fields))


class TreatmentInput(CaseDetails):
    # Primary source for the recommendation; may itself say guidelines are unavailable
    guideline_document_content: str


class CancerTreatmentOutput(BaseModel):
    """Structured result of a treatment flow."""

    model_config = ConfigDict(populate_by_name=True)

    recommendation: str = Field(min_length=1)
    references: Optional[str] = None
    no_recommendation_reason: Optional[str] = Field(default=None, alias="noRecommendationReason")

    @field_validator("recommendation", mode="before")
    @classmethod
    def strip_recommendation(cls, v):
        # whitespace-only fails min_length
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("references", mode="before")
    @classmethod
    def join_reference_list(cls, v):
        if isinstance(v, list):
            return "\n".join(str(item) for item in v)
        return v

    @field_validator("references", "no_recommendation_reason")
    @classmethod
    def blank_to_none(cls, v):
        if v is not None and not v.strip():
            return None
        return v


class GuidelineDocument(BaseModel):
    file_name: str
    processed_at: datetime
    content: str

    @computed_field
    @property
    def preview(self) -> str:
        return self.content[:100] + "..."


class GuidelineDocumentSummary(BaseModel):
    """What the API returns about a stored document; never the full content."""

    file_name: str
    processed_at: datetime
    preview: str

    @classmethod
    def of(cls, document: GuidelineDocument) -> "GuidelineDocumentSummary":
        return cls(file_name=document.file_name, processed_at=document.processed_at, preview=document.preview)


class AuditEntry(CaseDetails):
    """A submitted case and its result. The guideline text itself is not kept."""

    id: str
    timestamp: datetime

    recommendation: str
    references: Optional[str] = None
    no_recommendation_reason: Optional[str] = None
    used_guideline_files: List[str] = Field(default_factory=list)

    is_accepted: bool = False
    accepted_at: Optional[datetime] = None
    doctors_note: Optional[str] = None

    @computed_field
    @property
    def recommendation_snippet(self) -> str:
        return self.recommendation[:100]


# ============================================================
# API MODELS
# ============================================================

class Notice(BaseModel):
    title: str
    description: str


class AssessmentResponse(BaseModel):
    output: CancerTreatmentOutput
    entry: AuditEntry
    notice: Notice


class AcceptRequest(BaseModel):
    doctors_note: Optional[str] = Field(default=None, max_length=MAX_NOTE_LENGTH)


class GuidelineTextRequest(BaseModel):
    cancer_type: CancerType
    file_name: str = Field(min_length=1)
    content: str = Field(min_length=1)
    replace: bool = True


class GuidelineFetchRequest(BaseModel):
    cancer_type: CancerType
    url: str = Field(min_length=1)
    replace: bool = True


class GuidelineUploadResponse(BaseModel):
    cancer_type: CancerType
    document: GuidelineDocumentSummary
    replaced: Optional[str] = None
    notice: Notice
