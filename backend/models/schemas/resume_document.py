"""Structured resume records produced from free resume text."""

from pydantic import BaseModel, ConfigDict, Field

SECTION_KEYS: tuple[str, ...] = (
    "summary",
    "experience",
    "education",
    "skills",
    "certifications",
    "projects",
    "achievements",
    "languages",
    "publications",
    "volunteer",
    "other",
)


class PersonalInfo(BaseModel):
    """Contact details picked from the top of the resume."""
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    linkedin: str | None = None
    github: str | None = None
    website: str | None = None


class StructuredResumeDocument(BaseModel):
    """Resume lines grouped under canonical section keys (see SECTION_KEYS)."""

    model_config = ConfigDict(populate_by_name=True)

    personal_info: PersonalInfo = Field(default_factory=PersonalInfo, alias="personalInfo")
    sections: dict[str, list[str]] = {}
    # lines before the first header that were read as personal info
    personal_info_line_count: int = Field(0, alias="personalInfoLineCount")
    raw_text: str = Field("", alias="rawText")


class ExperienceEntry(BaseModel):
    """A single job stint within the experience section."""

    model_config = ConfigDict(frozen=True)

    title: str
    company: str | None = None
    duration: str | None = None
    bullets: tuple[str, ...] = ()


class ATSCompatibility(BaseModel):
    """Coarse ATS readiness of a structured resume."""

    model_config = ConfigDict(populate_by_name=True)

    is_ats_compatible: bool = Field(False, alias="isATSCompatible")
    missing_sections: dict[str, bool] = Field(default_factory=dict, alias="missingSections")
    completeness: float = 0.0  # 0.0-1.0 weighted
