from pydantic import BaseModel, ConfigDict, Field

from models.schemas.comparison import ComparisonResult


class _CamelRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ExtractJobDetailsRequest(_CamelRequest):
    job_description: str = Field(..., alias="jobDescription", description="Raw job posting text")


class CompareResumeRequest(_CamelRequest):
    resume_text: str = Field(..., alias="resumeText", max_length=50000)
    job_description: str = Field(..., alias="jobDescription", max_length=500000)


class StructureResumeRequest(_CamelRequest):
    resume_text: str = Field(..., alias="resumeText", max_length=50000)


class GenerateATSResumeRequest(_CamelRequest):
    resume_text: str = Field(..., alias="resumeText", max_length=50000)
    job_description: str = Field(..., alias="jobDescription", max_length=500000)
    comparison_result: ComparisonResult = Field(..., alias="comparisonResult")
    resume_file_name: str | None = Field(None, alias="resumeFileName")


class CleanupRequest(_CamelRequest):
    resume_id: str = Field(..., alias="resumeId")


class AnalyzeResumeRequest(_CamelRequest):
    resume_id: str = Field(..., alias="resumeId", description="Stored resume id or file name")
    job_description: str = Field(..., alias="jobDescription", max_length=500000)
