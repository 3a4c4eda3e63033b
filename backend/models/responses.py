from pydantic import BaseModel, ConfigDict, Field

from models.schemas.comparison import Suggestion
from models.schemas.incorporation import IncorporationReport
from models.schemas.resume_document import (
    ATSCompatibility,
    ExperienceEntry,
    StructuredResumeDocument,
)


class OptimizedResume(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    optimized_resume: str = Field("", alias="optimizedResume")
    incorporation: IncorporationReport = IncorporationReport()
    improvements: list[Suggestion] = []
    message: str = "ATS-optimized resume generated successfully"


class StructuredResume(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    document: StructuredResumeDocument
    experience: list[ExperienceEntry] = []
    ats_compatibility: ATSCompatibility = Field(ATSCompatibility(), alias="atsCompatibility")


class ResumeInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file_name: str = Field(alias="fileName")
    resume_id: str = Field(alias="resumeId")
    word_count: int = Field(0, alias="wordCount")


class ResumeHistoryItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    file_name: str = Field(alias="fileName")
    uploaded_at: str = Field(alias="uploadedAt")
    has_optimized_version: bool = Field(False, alias="hasOptimizedVersion")
    optimized_resume_id: str | None = Field(None, alias="optimizedResumeId")
