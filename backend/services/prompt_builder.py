"""All prompt templates for Gemini API calls."""

import math

from models.schemas.job_fields import ARRAY_FIELDS, SCALAR_FIELDS

_FIELD_HINTS: dict[str, str] = {
    "company": "Company name",
    "title": "Exact job title",
    "salary": "Salary range/amount (e.g. $50,000-$70,000, $25/hour)",
    "location": "Full location (City, State, Country) or Remote",
    "type": "Full-time/Part-time/Contract/Internship/Temporary/Freelance",
    "description": "Brief 2-3 sentence summary of role responsibilities",
    "requirements": "requirement",
    "skills": "technical skill",
    "experience": "Required years/level (e.g. 3-5 years, Entry level, Senior)",
    "education": "Education requirements (e.g. Bachelor's degree)",
    "benefits": "benefit",
    "keywords": "important keyword",
    "department": "Department/Division/Team name",
    "reportingTo": "Reports to position title",
    "workModel": "Remote/Hybrid/On-site",
    "applicationDeadline": "Application deadline date",
    "applicationUrl": "Application website URL",
    "contactEmail": "Contact email address",
    "postedDate": "When job was posted",
    "industryType": "Industry/Sector (e.g. Technology, Healthcare)",
    "companySize": "Company size (e.g. 50-100 employees, Startup)",
    "workSchedule": "Work hours/schedule (e.g. 9-5, Flexible, Shifts)",
    "travelRequired": "Travel requirements percentage/description",
    "securityClearance": "Security clearance required",
    "visaSponsorship": "Visa sponsorship availability (Yes/No)",
}


def _job_field_template() -> str:
    lines = []
    for field in SCALAR_FIELDS + ARRAY_FIELDS:
        hint = _FIELD_HINTS.get(field, field)
        if field in ARRAY_FIELDS:
            lines.append(f'  "{field}": ["{hint}1", "{hint}2"] or []')
        else:
            lines.append(f'  "{field}": "{hint} or N/A"')
    return "{\n" + ",\n".join(lines) + "\n}"


def build_job_extraction_prompt(job_description: str) -> str:
    """Call A: structured job-posting fields."""
    return f"""You are an expert job posting analyzer for job tracking systems. Extract ALL available information from the job posting below. For any information that is not available, missing, or unclear, use "N/A" as the value.

CRITICAL: Return ONLY a valid JSON object with NO markdown formatting, code blocks, or explanatory text.

Extract these fields with exact key names:
{_job_field_template()}

Important rules:
- Use "N/A" for any missing information
- Keep arrays empty [] if no items found
- Extract exact text when possible
- Don't make assumptions or infer information not explicitly stated
- Parse salary formats carefully (annual, hourly, ranges)

Job Posting Text:
{job_description}

JSON Response:"""


def build_comparison_prompt(resume_text: str, job_description: str) -> str:
    """Call B: resume vs job description keyword analysis."""
    return f"""You are an expert ATS (Applicant Tracking System) resume analyzer.

Analyze the job description and resume following these EXACT steps:

STEP 1: Validate Job Description
- If the job description is missing, empty, or too short (less than 50 words), return ONLY this JSON and STOP:
{{"error": "Job description is missing or insufficient for meaningful ATS analysis. Please provide a detailed job description with at least 50 words."}}

STEP 2: Extract keywords from the job description ONLY
- Extract ONLY skills, technologies, tools, certifications, methodologies and domain terms LITERALLY WRITTEN in the job description
- NEVER infer generic skills or add skills that only appear in the resume

STEP 3: Compare with the resume
- matchedSkills: job description keywords found in the resume (exact or common synonym, e.g. "JS" for "JavaScript")
- missingSkills: job description keywords NOT found in the resume

STEP 4: For each missing skill, suggest a resume section and how to integrate it

STEP 5: Scores (integers 0-100)
- experienceMatch: experience level and responsibilities vs the job description
- skillsMatch: share of technical skills from the job description found in the resume
- keywordMatch: share of all job description keywords found in the resume
- overallScore: 40% skillsMatch + 30% keywordMatch + 30% experienceMatch
- atsScore: ATS compatibility based on keyword density and formatting

Return ONLY JSON in this exact structure:
{{
  "matchPercentage": <number 0-100>,
  "matchedSkills": [<skills found in BOTH job description AND resume>],
  "missingSkills": [<skills from job description NOT found in resume>],
  "suggestions": [
    {{"keyword": "<missing keyword>", "section": "<resume section>", "suggestion": "<actionable advice>"}}
  ],
  "experienceMatch": <number 0-100>,
  "skillsMatch": <number 0-100>,
  "keywordMatch": <number 0-100>,
  "overallScore": <number 0-100>,
  "atsScore": <number 0-100>,
  "extractedKeywords": [<ALL keywords extracted from job description>],
  "explanation": "<brief explanation referencing the job description and resume>",
  "error": null
}}

JOB DESCRIPTION:
---
{job_description}
---

RESUME:
---
{resume_text}
---

Before answering, double-check that every skill in matchedSkills and missingSkills actually exists in the job description.

JSON Response:"""


def build_ats_resume_prompt(
    resume_text: str,
    job_description: str,
    matched_skills: list[str],
    missing_skills: list[str],
) -> str:
    """Call C: plain-text ATS-optimized resume integrating missing skills."""
    n = len(missing_skills)
    return f"""You are a professional resume writer and ATS optimization expert.

Rewrite the resume below into an ATS-optimized version that naturally integrates the missing skills while staying truthful and readable.

MISSING SKILLS TO INTEGRATE (MUST INCLUDE ALL):
{', '.join(missing_skills) or 'None'}

ALREADY MATCHED SKILLS (KEEP THESE):
{', '.join(matched_skills) or 'None'}

INTEGRATION STRATEGY:
- Professional Summary: about {math.ceil(n * 0.4)} missing skills
- Skills section: about {math.ceil(n * 0.3)} missing skills, grouped logically
- Professional Experience: about {math.ceil(n * 0.2)} missing skills in bullet points with metrics
- Projects/Achievements: the remaining missing skills

FORMATTING RULES:
- Plain text only, no markdown, no tables or columns
- Name on the first line, contact details on the following lines
- Standard section headers on their own line: SUMMARY, EXPERIENCE, SKILLS, EDUCATION, PROJECTS, CERTIFICATIONS
- Under EXPERIENCE: job title line, company line, date range line, then "• " bullets

RESUME:
---
{resume_text}
---

JOB DESCRIPTION:
---
{job_description}
---

Return only the optimized resume text."""
