"""Resume section segmentation and personal-info extraction."""

import logging
import re

from models.schemas.resume_document import (
    ATSCompatibility,
    PersonalInfo,
    StructuredResumeDocument,
)
from services.errors import EmptyInputError
from services.pdf_parser import is_bullet

logger = logging.getLogger(__name__)

# Header phrases and their canonical section key
SECTION_HEADERS: dict[str, str] = {
    # summary
    "summary": "summary",
    "professional summary": "summary",
    "executive summary": "summary",
    "career summary": "summary",
    "objective": "summary",
    "career objective": "summary",
    "profile": "summary",
    "professional profile": "summary",
    "about me": "summary",
    "overview": "summary",
    "background": "summary",
    # experience
    "experience": "experience",
    "work experience": "experience",
    "professional experience": "experience",
    "relevant experience": "experience",
    "employment history": "experience",
    "career history": "experience",
    "work history": "experience",
    # education
    "education": "education",
    "academic background": "education",
    "educational background": "education",
    "academic qualifications": "education",
    # skills
    "skills": "skills",
    "technical skills": "skills",
    "key skills": "skills",
    "core competencies": "skills",
    "competencies": "skills",
    "expertise": "skills",
    "proficiencies": "skills",
    "capabilities": "skills",
    "strengths": "skills",
    "qualifications": "skills",
    "programming languages": "skills",
    # certifications
    "certifications": "certifications",
    "certificates": "certifications",
    "licenses and certifications": "certifications",
    # projects
    "projects": "projects",
    "key projects": "projects",
    "personal projects": "projects",
    # achievements
    "achievements": "achievements",
    "awards": "achievements",
    "honors": "achievements",
    "accomplishments": "achievements",
    "highlights": "achievements",
    # single-key sections
    "languages": "languages",
    "publications": "publications",
    "volunteer": "volunteer",
    "volunteer experience": "volunteer",
    "volunteering": "volunteer",
    # recognised but without a dedicated key
    "interests": "other",
    "hobbies": "other",
    "references": "other",
    "activities": "other",
}

# Longest phrase first so "volunteer experience" beats "experience"
_HEADER_PHRASES = sorted(SECTION_HEADERS, key=len, reverse=True)

# Slack allowed around a phrase for a line to still count as a header
HEADER_LENGTH_SLACK = 10

PERSONAL_INFO_SCAN_LINES = 15

# Contact info patterns
EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
PHONE_RE = re.compile(r"(?<!\d)(?:\+\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}\b")
LINKEDIN_RE = re.compile(r"linkedin\.com/in/[\w-]+", re.IGNORECASE)
GITHUB_RE = re.compile(r"github\.com/[\w-]+", re.IGNORECASE)
WEBSITE_RE = re.compile(r"(?:https?://|www\.)[\w.-]+\.[a-z]{2,}(?:/[\w./%-]*)?", re.IGNORECASE)

_CONTACT_PATTERNS: tuple[tuple[str, re.Pattern], ...] = (
    ("email", EMAIL_RE),
    ("phone", PHONE_RE),
    ("linkedin", LINKEDIN_RE),
    ("github", GITHUB_RE),
)

# Weighted section importance for completeness scoring
SECTION_WEIGHTS: dict[str, float] = {
    "experience": 20,
    "skills": 15,
    "education": 12,
    "projects": 12,
    "summary": 10,
    "certifications": 8,
    "achievements": 5,
}
_TOTAL_WEIGHT = sum(SECTION_WEIGHTS.values())


def _header_text(line: str) -> str | None:
    """Lower-cased header candidate, or None for lines that can't be headers.

    Markdown decorations (``## Skills``, ``**SKILLS**``) are unwrapped first.
    """
    text = line.strip().lstrip("#").strip()
    if text.startswith("**") and text.endswith("**") and len(text) > 4:
        text = text.strip("*").strip()
    elif is_bullet(text):
        return None
    return text.lower()


def _trailing_content(line: str, phrase: str) -> str:
    """Original-case text after ``phrase`` and its ``:``/``-`` separator."""
    start = line.lower().find(phrase)
    after = line[start + len(phrase):].lstrip()[1:]
    return after.strip().strip("*").strip()


def match_section_header(line: str) -> tuple[str, str] | None:
    """Classify ``line`` as a section header.

    Returns ``(section_key, trailing_content)`` where trailing_content is
    whatever followed ``Header:`` or ``Header -`` on the same line.
    """
    text = _header_text(line)
    if not text:
        return None
    bare = text.rstrip(":").strip()

    for phrase in _HEADER_PHRASES:
        if bare == phrase:
            return SECTION_HEADERS[phrase], ""
        if text.startswith(phrase) and text[len(phrase):].lstrip()[:1] in (":", "-"):
            return SECTION_HEADERS[phrase], _trailing_content(line, phrase)
        if phrase in bare and len(bare) <= len(phrase) + HEADER_LENGTH_SLACK:
            return SECTION_HEADERS[phrase], ""
    return None


def is_section_header(line: str) -> bool:
    return match_section_header(line) is not None


def _website(line: str) -> str | None:
    for match in WEBSITE_RE.finditer(line):
        value = match.group()
        lowered = value.lower()
        if "linkedin" not in lowered and "github" not in lowered:
            return value
    return None


def _extract_personal_info(
    lines: list[str], first_header: int
) -> tuple[PersonalInfo, int]:
    """Scan the top lines for contact details.

    Returns the info and how many pre-header lines it consumed.
    """
    info: dict[str, str] = {}
    consumed = 0

    for index, line in enumerate(lines[:PERSONAL_INFO_SCAN_LINES]):
        if is_section_header(line):
            continue

        line_matched = False
        for field, pattern in _CONTACT_PATTERNS:
            match = pattern.search(line)
            if match:
                line_matched = True
                info.setdefault(field, match.group().strip())
        website = _website(line)
        if website:
            line_matched = True
            info.setdefault("website", website)

        pre_header = index < first_header
        if not line_matched and pre_header and "name" not in info:
            info["name"] = line
            line_matched = True
        if line_matched and pre_header:
            consumed += 1

    return PersonalInfo(**info), consumed


def parse_resume(text: str) -> StructuredResumeDocument:
    """Split resume text into canonical sections plus personal info.

    Lines before the first recognised header are only used for personal
    info; everything after belongs to exactly one section.
    """
    if not text or not text.strip():
        raise EmptyInputError("Resume text is empty")

    lines = [line.strip() for line in text.split("\n")]
    lines = [line for line in lines if line]

    sections: dict[str, list[str]] = {}
    current: str | None = None
    first_header = len(lines)

    for index, line in enumerate(lines):
        header = match_section_header(line)
        if header is not None:
            key, trailing = header
            if current is None:
                first_header = index
            current = key
            body = sections.setdefault(key, [])
            if trailing:
                body.append(trailing)
        elif current is not None:
            sections[current].append(line)

    personal_info, consumed = _extract_personal_info(lines, first_header)
    if current is None:
        logger.info("No section headers recognised in %d resume lines", len(lines))

    return StructuredResumeDocument(
        personal_info=personal_info,
        sections=sections,
        personal_info_line_count=consumed,
        raw_text=text,
    )


def compute_section_completeness(sections: dict[str, list[str]]) -> float:
    """Score 0.0-1.0 based on weighted importance of present sections."""
    found_weight = sum(
        SECTION_WEIGHTS[s] for s in SECTION_WEIGHTS if sections.get(s)
    )
    return round(found_weight / _TOTAL_WEIGHT, 3)


def check_ats_compatibility(document: StructuredResumeDocument) -> ATSCompatibility:
    """An ATS-friendly resume needs contact info, experience and skills."""
    info = document.personal_info
    missing = {
        "contactInfo": not (info.email or info.phone),
        "experience": not document.sections.get("experience"),
        "skills": not document.sections.get("skills"),
    }
    return ATSCompatibility(
        is_ats_compatible=not any(missing.values()),
        missing_sections=missing,
        completeness=compute_section_completeness(document.sections),
    )
