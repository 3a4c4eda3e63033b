"""Shared dependencies for API routes."""

from config import settings
from services.gemini_client import get_client
from services.resume_store import ResumeStore

_resume_store = ResumeStore(
    ttl_seconds=settings.resume_store_ttl_seconds,
    max_entries=settings.resume_store_max_entries,
)


def get_gemini_client():
    return get_client()


def get_resume_store() -> ResumeStore:
    return _resume_store
