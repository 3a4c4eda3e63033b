"""Orchestrator: the flows behind the job and resume endpoints.

Job details:
    job_description -> Gemini -> JSON recovery -> schema enforcement
Comparison:
    resume + job_description -> Gemini -> JSON recovery -> skill reconciliation
ATS resume:
    resume + job_description + comparison -> Gemini (plain text)
      -> incorporation check of the previously-missing skills
Structure:
    resume text -> section classifier -> experience grouper -> ATS check
"""

import logging

from config import settings
from models.responses import OptimizedResume, StructuredResume
from models.schemas.comparison import ComparisonResult
from models.schemas.job_fields import ExtractedJobFields
from services import gemini_client, prompt_builder
from services.errors import AIServiceUnavailableError, InvalidInputError
from services.experience_grouper import group_experience
from services.incorporation import verify_incorporation
from services.job_fields import enforce_job_schema
from services.section_parser import check_ats_compatibility, parse_resume
from services.skill_reconciler import reconcile_comparison

logger = logging.getLogger(__name__)


async def extract_job_details(job_description: str) -> ExtractedJobFields:
    """Extract the fixed job-posting fields from a job description."""
    if not job_description or not job_description.strip():
        raise InvalidInputError("Job description text is required")
    if len(job_description) > settings.max_job_description_chars:
        raise InvalidInputError(
            f"Job description too long. Maximum {settings.max_job_description_chars:,} characters allowed."
        )

    prompt = prompt_builder.build_job_extraction_prompt(job_description)
    raw = await gemini_client.generate_json(prompt)
    if raw is None:
        raise AIServiceUnavailableError("AI service unavailable for job extraction")

    return enforce_job_schema(raw)


async def compare_resume_with_job(resume_text: str, job_description: str) -> ComparisonResult:
    """Ask the model for a comparison, then ground it in the job description."""
    if not resume_text or not resume_text.strip():
        raise InvalidInputError("Resume text is required")
    if not job_description or not job_description.strip():
        raise InvalidInputError("Job description is required")

    prompt = prompt_builder.build_comparison_prompt(resume_text, job_description)
    raw = await gemini_client.generate_json(prompt)
    if raw is None:
        raise AIServiceUnavailableError("AI service unavailable for resume comparison")

    result = reconcile_comparison(job_description, raw, resume_text=resume_text)
    if result.is_error:
        logger.info("Comparison returned validation error: %s", result.error)
    else:
        logger.info(
            "Comparison: %d matched, %d missing, %d invalid, overall %d",
            len(result.matched_skills),
            len(result.missing_skills),
            len(result.invalid_keywords),
            result.overall_score,
        )
    return result


async def generate_ats_resume(
    resume_text: str,
    job_description: str,
    comparison: ComparisonResult,
) -> OptimizedResume:
    """Regenerate the resume and report which missing skills it now covers."""
    if not resume_text or not job_description:
        raise InvalidInputError("Resume content and job description are required")
    if len(job_description.strip()) < settings.min_job_description_chars:
        raise InvalidInputError(
            "Job description too short. Please provide a detailed job description "
            f"with at least {settings.min_job_description_chars} characters."
        )
    if comparison.is_error:
        raise InvalidInputError(comparison.error)

    matched = comparison.matched_skills or []
    missing = comparison.missing_skills or []
    prompt = prompt_builder.build_ats_resume_prompt(
        resume_text, job_description, matched, missing
    )
    text = await gemini_client.generate_text(prompt)
    if text is None:
        raise AIServiceUnavailableError("Failed to generate optimized resume")

    optimized = gemini_client.strip_code_fences(text)
    report = verify_incorporation(missing, optimized)
    if report.remaining_missing_skills:
        logger.warning(
            "Optimized resume still misses %d of %d skills: %s",
            len(report.remaining_missing_skills),
            len(missing),
            ", ".join(report.remaining_missing_skills),
        )

    return OptimizedResume(
        optimized_resume=optimized,
        incorporation=report,
        improvements=comparison.suggestions or [],
    )


def structure_resume(resume_text: str) -> StructuredResume:
    """Parse resume text into sections, experience entries and an ATS check."""
    document = parse_resume(resume_text)
    experience = group_experience(document.sections.get("experience", []))
    return StructuredResume(
        document=document,
        experience=experience,
        ats_compatibility=check_ats_compatibility(document),
    )
