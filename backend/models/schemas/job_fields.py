"""Structured job-posting fields extracted from a job description."""

from pydantic import BaseModel, ConfigDict, Field

NOT_AVAILABLE = "N/A"

SCALAR_FIELDS: tuple[str, ...] = (
    "company",
    "title",
    "salary",
    "location",
    "type",
    "description",
    "experience",
    "education",
    "department",
    "reportingTo",
    "workModel",
    "applicationDeadline",
    "applicationUrl",
    "contactEmail",
    "postedDate",
    "industryType",
    "companySize",
    "workSchedule",
    "travelRequired",
    "securityClearance",
    "visaSponsorship",
)

ARRAY_FIELDS: tuple[str, ...] = (
    "requirements",
    "skills",
    "benefits",
    "keywords",
)


class ExtractedJobFields(BaseModel):
    """Every field is always present; unknown values are "N/A" or []."""

    model_config = ConfigDict(populate_by_name=True)

    company: str = NOT_AVAILABLE
    title: str = NOT_AVAILABLE
    salary: str = NOT_AVAILABLE
    location: str = NOT_AVAILABLE
    type: str = NOT_AVAILABLE
    description: str = NOT_AVAILABLE
    requirements: list[str] = []
    skills: list[str] = []
    experience: str = NOT_AVAILABLE
    education: str = NOT_AVAILABLE
    benefits: list[str] = []
    keywords: list[str] = []
    department: str = NOT_AVAILABLE
    reporting_to: str = Field(NOT_AVAILABLE, alias="reportingTo")
    work_model: str = Field(NOT_AVAILABLE, alias="workModel")
    application_deadline: str = Field(NOT_AVAILABLE, alias="applicationDeadline")
    application_url: str = Field(NOT_AVAILABLE, alias="applicationUrl")
    contact_email: str = Field(NOT_AVAILABLE, alias="contactEmail")
    posted_date: str = Field(NOT_AVAILABLE, alias="postedDate")
    industry_type: str = Field(NOT_AVAILABLE, alias="industryType")
    company_size: str = Field(NOT_AVAILABLE, alias="companySize")
    work_schedule: str = Field(NOT_AVAILABLE, alias="workSchedule")
    travel_required: str = Field(NOT_AVAILABLE, alias="travelRequired")
    security_clearance: str = Field(NOT_AVAILABLE, alias="securityClearance")
    visa_sponsorship: str = Field(NOT_AVAILABLE, alias="visaSponsorship")
