import pytest

from services.json_recovery import recover_json
from services.skill_reconciler import (
    clamp_score,
    compute_overall_score,
    is_grounded,
    reconcile_comparison,
    round_half_up,
    skill_variants,
    validate_keywords,
)


JD = (
    "We are hiring a backend engineer. You will build REST API services in Python "
    "and SQL, ship them with Docker, and deploy microservices on Kubernetes. "
    "Experience with Node.js is a plus."
)


def test_scenario_drops_ungrounded_skill():
    jd = "Looking for a developer with strong Python experience to build data pipelines."
    result = reconcile_comparison(jd, {"matchedSkills": ["Python", "communication"]})
    assert result.matched_skills == ["Python"]
    assert result.invalid_keywords == ["communication"]
    assert result.validation_rate == 50


@pytest.mark.parametrize(
    "raw",
    [
        {"matchedSkills": ["Python", "Teamwork"], "missingSkills": ["Kubernetes", "Rust"]},
        {"matchedSkills": ["SQL", "python", "Leadership"], "missingSkills": ["Node.js", "GraphQL"]},
        {"matchedSkills": "Docker", "missingSkills": ["APIs", "Go lang", None]},
        {"matchedSkills": [], "missingSkills": ["microservice", "Agile"]},
    ],
)
def test_every_reported_skill_is_grounded(raw):
    result = reconcile_comparison(JD, raw)
    jd_lower = JD.lower()
    for skill in result.matched_skills + result.missing_skills:
        assert is_grounded(skill, jd_lower)


def test_error_short_circuits():
    result = reconcile_comparison(JD, {"error": "Input is not a resume", "matchedSkills": ["Python"]})
    assert result.is_error
    assert result.model_dump(by_alias=True, exclude_none=True) == {"error": "Input is not a resume"}


def test_falsy_error_is_ignored():
    result = reconcile_comparison(JD, {"error": "", "matchedSkills": ["Python"]})
    assert not result.is_error
    assert result.matched_skills == ["Python"]


def test_non_mapping_raw_gives_empty_result():
    result = reconcile_comparison(JD, None)
    assert result.matched_skills == []
    assert result.missing_skills == []
    assert result.validation_rate == 100.0
    assert result.overall_score == 0


def test_skill_in_both_lists_stays_matched():
    result = reconcile_comparison(
        JD, {"matchedSkills": ["Python", "python"], "missingSkills": ["PYTHON", "SQL"]}
    )
    assert result.matched_skills == ["Python"]
    assert result.missing_skills == ["SQL"]


def test_missing_skill_found_in_resume_moves_to_matched():
    result = reconcile_comparison(
        JD,
        {"matchedSkills": ["Python"], "missingSkills": ["Docker", "Kubernetes"]},
        resume_text="Shipped containers with docker for three years.",
    )
    assert result.matched_skills == ["Python", "Docker"]
    assert result.missing_skills == ["Kubernetes"]


def test_scores_derived_when_absent():
    result = reconcile_comparison(JD, {"matchedSkills": ["Python"], "missingSkills": ["Docker"]})
    assert result.skills_match == 50
    assert result.keyword_match == 50
    assert result.experience_match == 0
    assert result.overall_score == 35
    assert result.match_percentage == 35
    assert result.ats_score == 35


def test_reported_scores_are_clamped():
    result = reconcile_comparison(
        JD,
        {
            "matchedSkills": ["Python"],
            "skillsMatch": 80,
            "keywordMatch": "70%",
            "experienceMatch": 150,
            "atsScore": 90,
        },
    )
    assert result.skills_match == 80
    assert result.keyword_match == 70
    assert result.experience_match == 100
    assert result.overall_score == 83
    assert result.match_percentage == result.overall_score
    assert result.ats_score == 90


def test_extracted_keywords_grounded_and_include_skills():
    result = reconcile_comparison(
        JD,
        {
            "matchedSkills": ["Python"],
            "missingSkills": ["Kubernetes"],
            "extractedKeywords": ["REST API", "Blockchain", "python"],
        },
    )
    assert result.extracted_keywords == ["REST API", "python", "Kubernetes"]


def test_suggestions_for_ungrounded_keywords_dropped():
    result = reconcile_comparison(
        JD,
        {
            "missingSkills": ["Docker"],
            "suggestions": [
                {"keyword": "Docker", "section": "skills", "suggestion": "List Docker under tools"},
                {"keyword": "communication", "section": "summary", "suggestion": "Mention it"},
                "not a suggestion",
            ],
        },
    )
    assert [s.keyword for s in result.suggestions] == ["Docker"]
    assert result.suggestions[0].section == "skills"


def test_skill_variants_naive_plural():
    assert skill_variants("AWS") == ["aws", "awss", "aw"]
    assert skill_variants("Node.js") == ["node.js", "nodejs", "node.jss", "node.j"]


@pytest.mark.parametrize(
    "skill,expected",
    [
        ("python", True),
        ("NodeJS", True),
        ("APIs", True),
        ("Microservice", True),
        ("REST API", True),
        ("communication", False),
        ("Java", False),
    ],
)
def test_is_grounded(skill, expected):
    jd_lower = JD.lower().replace("node.js", "nodejs")
    assert is_grounded(skill, jd_lower) is expected


def test_validate_keywords():
    validation = validate_keywords(["Python", "Teamwork", "Agile"], JD)
    assert validation.valid_keywords == ["Python"]
    assert validation.invalid_keywords == ["Teamwork", "Agile"]
    assert validation.validation_rate == 33.33


def test_validate_keywords_empty():
    assert validate_keywords([], JD).validation_rate == 100.0


@pytest.mark.parametrize(
    "value,expected",
    [
        (42, 42), (42.6, 43), (12.5, 13), (-5, 0), (250, 100), (10**400, 100), ("55%", 55),
        ("abc", None), (True, None), (None, None), ([1], None),
        (float("nan"), None), (float("inf"), None), ("inf", None), ("NaN", None),
    ],
)
def test_clamp_score(value, expected):
    assert clamp_score(value) == expected


def test_compute_overall_score_bounds():
    assert compute_overall_score(100, 100, 100) == 100
    assert compute_overall_score(0, 0, 0) == 0


@pytest.mark.parametrize("value,expected", [(12.5, 13), (0.5, 1), (2.5, 3), (42.4, 42), (7, 7)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_non_finite_model_scores_fall_back():
    raw = recover_json('{"matchedSkills": ["Python"], "skillsMatch": NaN, "keywordMatch": Infinity}')
    result = reconcile_comparison("We need Python", raw)
    assert result.skills_match == 100
    assert result.keyword_match == 100
    assert result.overall_score == 70


def test_nan_string_ats_score_falls_back_to_overall():
    result = reconcile_comparison("We need Python", {"matchedSkills": ["Python"], "atsScore": "nan"})
    assert result.ats_score == result.overall_score
