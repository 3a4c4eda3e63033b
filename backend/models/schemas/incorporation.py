"""Keyword incorporation check for a regenerated resume."""

from pydantic import BaseModel, ConfigDict, Field


class IncorporationReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    incorporated_skills: list[str] = Field(default_factory=list, alias="incorporatedSkills")
    remaining_missing_skills: list[str] = Field(default_factory=list, alias="remainingMissingSkills")
    incorporation_rate: int = Field(100, alias="incorporationRate")  # 0-100
