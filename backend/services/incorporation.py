"""Check which previously-missing skills made it into a regenerated resume."""

from models.schemas.incorporation import IncorporationReport
from services.skill_reconciler import round_half_up


def verify_incorporation(missing_skills: list[str], regenerated_text: str) -> IncorporationReport:
    """Case-insensitive containment of each missing skill in the new text.

    The rate is 100 when there was nothing to incorporate.
    """
    text_lower = (regenerated_text or "").lower()
    incorporated: list[str] = []
    remaining: list[str] = []
    for skill in missing_skills:
        if skill and skill.lower() in text_lower:
            incorporated.append(skill)
        else:
            remaining.append(skill)

    if missing_skills:
        rate = round_half_up(len(incorporated) / len(missing_skills) * 100)
    else:
        rate = 100

    return IncorporationReport(
        incorporated_skills=incorporated,
        remaining_missing_skills=remaining,
        incorporation_rate=rate,
    )
