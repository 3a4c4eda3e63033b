"""Group experience-section lines into ExperienceEntry records.

Each line is typed by flat predicates checked in priority order:
title, company, duration, bullet. A title line opens a new entry; the
other kinds attach to the open entry or are dropped when none is open.
"""

import logging
import re
from enum import Enum

from models.schemas.resume_document import ExperienceEntry
from services.pdf_parser import is_bullet, strip_bullet

logger = logging.getLogger(__name__)

TITLE_KEYWORDS: tuple[str, ...] = (
    "engineer", "developer", "manager", "analyst", "director", "specialist",
    "consultant", "coordinator", "lead", "senior", "junior",
)

COMPANY_KEYWORDS: tuple[str, ...] = (
    "inc", "corp", "llc", "ltd", "company", "technologies", "solutions",
    "systems", "services",
)

# "2020", "FY2020", "03/2021", "2019 - 2023", "2020 - Present"
DURATION_RE = re.compile(
    r"\d{1,2}/\d{4}"
    r"|\d{4}\s*[-–—]\s*(?:\d{4}|present|current)"
    r"|\d{4}",
    re.IGNORECASE,
)

_SEGMENT_SPLIT_RE = re.compile(r"\s*\|\s*")


class LineKind(str, Enum):
    TITLE = "title"
    COMPANY = "company"
    DURATION = "duration"
    BULLET = "bullet"


def _has_title_keyword(text: str) -> bool:
    lowered = text.lower()
    return any(keyword in lowered for keyword in TITLE_KEYWORDS)


def _has_company_keyword(text: str) -> bool:
    lowered = text.lower()
    return any(keyword in lowered for keyword in COMPANY_KEYWORDS)


def is_title_line(line: str) -> bool:
    return not is_bullet(line) and _has_title_keyword(line)


def is_company_line(line: str) -> bool:
    return not is_bullet(line) and _has_company_keyword(line)


def is_duration_line(line: str) -> bool:
    return bool(DURATION_RE.search(line))


def classify_line(line: str) -> LineKind:
    """Tag a line; title wins over company wins over duration."""
    if is_title_line(line):
        return LineKind.TITLE
    if is_company_line(line):
        return LineKind.COMPANY
    if is_duration_line(line):
        return LineKind.DURATION
    return LineKind.BULLET


def _split_title_line(line: str) -> dict:
    """Break ``Title | Company | 2020 - Present`` into its parts."""
    parts = [p.strip() for p in _SEGMENT_SPLIT_RE.split(line) if p.strip()]
    if len(parts) < 2:
        return {"title": line.strip()}

    fields: dict = {}
    leftovers: list[str] = []
    for part in parts:
        if "title" not in fields and _has_title_keyword(part):
            fields["title"] = part
        elif "duration" not in fields and DURATION_RE.search(part) and not _has_company_keyword(part):
            fields["duration"] = part
        elif "company" not in fields and _has_company_keyword(part):
            fields["company"] = part
        else:
            leftovers.append(part)

    if "title" not in fields:
        return {"title": line.strip()}
    if "company" not in fields and leftovers:
        fields["company"] = leftovers.pop(0)
    if leftovers:
        fields["bullets"] = leftovers
    return fields


def _build(entry: dict) -> ExperienceEntry:
    return ExperienceEntry(
        title=entry["title"],
        company=entry.get("company"),
        duration=entry.get("duration"),
        bullets=tuple(entry.get("bullets", ())),
    )


def group_experience(lines: list[str]) -> list[ExperienceEntry]:
    """Cluster experience-section lines into job entries."""
    entries: list[ExperienceEntry] = []
    current: dict | None = None
    dropped = 0

    for raw in lines:
        line = raw.strip()
        if not line:
            continue
        kind = classify_line(line)

        if kind is LineKind.TITLE:
            if current is not None:
                entries.append(_build(current))
            current = _split_title_line(line)
            current.setdefault("bullets", [])
            continue

        if current is None:
            dropped += 1
            continue

        if kind is LineKind.COMPANY and "company" not in current:
            current["company"] = line
        elif kind is LineKind.DURATION and "duration" not in current:
            current["duration"] = line
        else:
            bullet = strip_bullet(line)
            if bullet:
                current["bullets"].append(bullet)

    if current is not None:
        entries.append(_build(current))

    if dropped:
        logger.debug("Dropped %d experience lines with no open entry", dropped)
    return entries
