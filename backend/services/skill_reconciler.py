"""Skill reconciliation: ground model-reported skills in the job description.

The model is asked to list only skills literally present in the job
description, but it regularly adds generic ones ("communication") or skills
lifted from the resume. Every matched/missing skill must survive a
literal, variant-tolerant substring check against the job description;
failures are reported in ``invalid_keywords`` rather than silently dropped.

Synonym handling (JS vs JavaScript) is left to the model. Only surface
variants are tolerated here: whitespace/punctuation removal and a naive
plural/singular, so "AWS" also tries "awss" and "aw".
"""

import logging
import math
import re
from typing import Any

from models.schemas.comparison import ComparisonResult, KeywordValidation, Suggestion
from services.job_fields import coerce_scalar, coerce_string_list

logger = logging.getLogger(__name__)

# Weights for the overall score
W_SKILLS = 0.4
W_KEYWORDS = 0.3
W_EXPERIENCE = 0.3


def skill_variants(skill: str) -> list[str]:
    """Lower-cased surface variants tried when grounding a skill."""
    lowered = skill.lower()
    variants = [
        lowered,
        re.sub(r"\s+", "", lowered),
        re.sub(r"[.-]", "", lowered),
        lowered + "s",
        re.sub(r"s$", "", lowered),
    ]
    return [v for v in dict.fromkeys(variants) if v]


def is_grounded(skill: str, job_description_lower: str) -> bool:
    return any(v in job_description_lower for v in skill_variants(skill))


def validate_keywords(keywords: list[str], job_description: str) -> KeywordValidation:
    """Split keywords into those found in the job description and the rest."""
    jd_lower = job_description.lower()
    valid: list[str] = []
    invalid: list[str] = []
    for keyword in keywords:
        (valid if is_grounded(keyword, jd_lower) else invalid).append(keyword)

    rate = 100.0 if not keywords else round(len(valid) / len(keywords) * 100, 2)
    return KeywordValidation(
        valid_keywords=valid,
        invalid_keywords=invalid,
        validation_rate=rate,
    )


def _dedupe(items: list[str]) -> list[str]:
    """Case-insensitive de-duplication keeping the first spelling."""
    seen: set[str] = set()
    out: list[str] = []
    for item in items:
        key = item.lower()
        if key not in seen:
            seen.add(key)
            out.append(item)
    return out


def round_half_up(value: float) -> int:
    """Round halves up, like JavaScript's Math.round."""
    if isinstance(value, int):
        return value
    return math.floor(value + 0.5)


def clamp_score(value: Any) -> int | None:
    """Coerce a model score into an int in [0, 100]; None if not numeric."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip().rstrip("%"))
        except ValueError:
            return None
    if not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return min(100, max(0, round_half_up(value)))


def _percent(part: int, whole: int) -> int:
    return round_half_up(part / whole * 100) if whole else 0


def compute_overall_score(skills_match: int, keyword_match: int, experience_match: int) -> int:
    raw = (
        W_SKILLS * skills_match
        + W_KEYWORDS * keyword_match
        + W_EXPERIENCE * experience_match
    )
    return min(100, max(0, round_half_up(raw)))


def _coerce_suggestions(raw: Any, valid_lower: set[str], jd_lower: str) -> list[Suggestion]:
    if not isinstance(raw, list):
        return []
    suggestions: list[Suggestion] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        keyword = coerce_scalar(item.get("keyword"), "suggestion.keyword")
        if keyword == "N/A":
            continue
        if keyword.lower() not in valid_lower and not is_grounded(keyword, jd_lower):
            logger.debug("Dropping suggestion for ungrounded keyword %r", keyword)
            continue
        suggestions.append(Suggestion(
            keyword=keyword,
            section=item.get("section") if isinstance(item.get("section"), str) else "",
            suggestion=item.get("suggestion") if isinstance(item.get("suggestion"), str) else "",
        ))
    return suggestions


def reconcile_comparison(
    job_description: str,
    raw: dict,
    resume_text: str | None = None,
) -> ComparisonResult:
    """Validate a model-reported comparison against the job description.

    A truthy ``error`` in ``raw`` short-circuits to an error-only result.
    """
    if not isinstance(raw, dict):
        raw = {}

    error = raw.get("error")
    if error:
        message = error if isinstance(error, str) else str(error)
        logger.info("Comparison short-circuited by model error: %s", message)
        return ComparisonResult(error=message)

    jd_lower = job_description.lower()

    matched = _dedupe(coerce_string_list(raw.get("matchedSkills"), "matchedSkills"))
    matched_lower = {s.lower() for s in matched}
    missing = [
        s for s in _dedupe(coerce_string_list(raw.get("missingSkills"), "missingSkills"))
        if s.lower() not in matched_lower
    ]

    validation = validate_keywords(matched + missing, job_description)
    valid_lower = {s.lower() for s in validation.valid_keywords}
    matched = [s for s in matched if s.lower() in valid_lower]
    missing = [s for s in missing if s.lower() in valid_lower]
    if validation.invalid_keywords:
        logger.warning(
            "Removed %d skills not present in job description: %s",
            len(validation.invalid_keywords),
            ", ".join(validation.invalid_keywords),
        )

    if resume_text:
        resume_lower = resume_text.lower()
        found = [s for s in missing if s.lower() in resume_lower]
        if found:
            matched.extend(found)
            missing = [s for s in missing if s not in found]

    extracted = [
        kw for kw in _dedupe(coerce_string_list(raw.get("extractedKeywords"), "extractedKeywords"))
        if is_grounded(kw, jd_lower)
    ]
    extracted_lower = {kw.lower() for kw in extracted}
    for skill in matched + missing:
        if skill.lower() not in extracted_lower:
            extracted.append(skill)
            extracted_lower.add(skill.lower())

    skills_match = clamp_score(raw.get("skillsMatch"))
    if skills_match is None:
        skills_match = _percent(len(matched), len(matched) + len(missing))
    keyword_match = clamp_score(raw.get("keywordMatch"))
    if keyword_match is None:
        keyword_match = _percent(len(matched), len(extracted))
    experience_match = clamp_score(raw.get("experienceMatch"))
    if experience_match is None:
        experience_match = 0

    overall = compute_overall_score(skills_match, keyword_match, experience_match)
    ats_score = clamp_score(raw.get("atsScore"))

    explanation = raw.get("explanation")
    return ComparisonResult(
        matched_skills=matched,
        missing_skills=missing,
        extracted_keywords=extracted,
        invalid_keywords=validation.invalid_keywords,
        validation_rate=validation.validation_rate,
        skills_match=skills_match,
        keyword_match=keyword_match,
        experience_match=experience_match,
        overall_score=overall,
        match_percentage=overall,
        ats_score=overall if ats_score is None else ats_score,
        suggestions=_coerce_suggestions(raw.get("suggestions"), valid_lower, jd_lower),
        explanation=explanation if isinstance(explanation, str) else "",
    )
