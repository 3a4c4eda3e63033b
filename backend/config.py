import os
from pydantic_settings import BaseSettings


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    gemini_temperature: float = 0.3
    gemini_max_output_tokens: int = 8192

    max_upload_size_mb: int = 5
    max_job_description_chars: int = 500_000
    min_job_description_chars: int = 50  # for ATS resume generation

    # in-memory resume store
    resume_store_ttl_seconds: int = 3600
    resume_store_max_entries: int = 200

    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    cors_origin_regex: str = r"chrome-extension://[a-z]+"
    debug: bool = False
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
