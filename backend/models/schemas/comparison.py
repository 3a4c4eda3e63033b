"""Resume-vs-job comparison records."""

from pydantic import BaseModel, ConfigDict, Field


class Suggestion(BaseModel):
    """Where and how to add one missing keyword."""
    keyword: str = ""
    section: str = ""
    suggestion: str = ""


class KeywordValidation(BaseModel):
    """Outcome of grounding a keyword list against a job description."""

    model_config = ConfigDict(populate_by_name=True)

    valid_keywords: list[str] = Field(default_factory=list, alias="validKeywords")
    invalid_keywords: list[str] = Field(default_factory=list, alias="invalidKeywords")
    validation_rate: float = Field(100.0, alias="validationRate")  # 0-100


class ComparisonResult(BaseModel):
    """Validated analysis of a resume against a job description.

    Either ``error`` is set and every other field is None, or the score
    and list fields are populated. Serialise with ``exclude_none=True`` to
    get the bare ``{"error": ...}`` shape for short-circuited results.
    """

    model_config = ConfigDict(populate_by_name=True)

    matched_skills: list[str] | None = Field(None, alias="matchedSkills")
    missing_skills: list[str] | None = Field(None, alias="missingSkills")
    extracted_keywords: list[str] | None = Field(None, alias="extractedKeywords")
    invalid_keywords: list[str] | None = Field(None, alias="invalidKeywords")
    validation_rate: float | None = Field(None, alias="validationRate")

    skills_match: int | None = Field(None, alias="skillsMatch")  # 0-100
    keyword_match: int | None = Field(None, alias="keywordMatch")  # 0-100
    experience_match: int | None = Field(None, alias="experienceMatch")  # 0-100
    overall_score: int | None = Field(None, alias="overallScore")  # 0-100
    match_percentage: int | None = Field(None, alias="matchPercentage")  # == overall_score
    ats_score: int | None = Field(None, alias="atsScore")  # 0-100

    suggestions: list[Suggestion] | None = None
    explanation: str | None = None
    error: str | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None
