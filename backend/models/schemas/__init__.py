"""Typed records passed between the parsing core and its callers."""

from models.schemas.comparison import ComparisonResult, KeywordValidation, Suggestion
from models.schemas.incorporation import IncorporationReport
from models.schemas.job_fields import ExtractedJobFields
from models.schemas.resume_document import (
    ATSCompatibility,
    ExperienceEntry,
    PersonalInfo,
    StructuredResumeDocument,
)

__all__ = [
    "ATSCompatibility",
    "ComparisonResult",
    "ExperienceEntry",
    "ExtractedJobFields",
    "IncorporationReport",
    "KeywordValidation",
    "PersonalInfo",
    "StructuredResumeDocument",
    "Suggestion",
]
