from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_gemini_client, get_resume_store
from config import settings
from models.requests import (
    AnalyzeResumeRequest,
    CleanupRequest,
    CompareResumeRequest,
    ExtractJobDetailsRequest,
    GenerateATSResumeRequest,
    StructureResumeRequest,
)
from models.responses import ResumeHistoryItem, ResumeInfo
from services import pdf_parser, resume_analyzer
from services.resume_store import ResumeStore

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


def _dump(model) -> dict:
    return model.model_dump(by_alias=True, exclude_none=True)


async def _read_upload(resume_file: UploadFile) -> str:
    """Validate an uploaded resume and return its text."""
    if not resume_file.filename or not resume_file.filename.lower().endswith(
        pdf_parser.SUPPORTED_EXTENSIONS
    ):
        raise HTTPException(
            status_code=400,
            detail=f"Only {', '.join(pdf_parser.SUPPORTED_EXTENSIONS)} files are accepted",
        )

    content = await resume_file.read()
    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Max size: {settings.max_upload_size_mb}MB",
        )

    try:
        resume_text = pdf_parser.extract_resume_text(content, resume_file.filename)
    except Exception:
        raise HTTPException(status_code=400, detail="Could not read resume file")

    if not resume_text.strip():
        raise HTTPException(status_code=400, detail="No text could be extracted from file")
    return resume_text


@router.get("/health")
async def health(client=Depends(get_gemini_client)):
    return {
        "status": "ok",
        "gemini_configured": client is not None,
    }


# --- Jobs ---


@router.post("/jobs/extract-job-details")
@limiter.limit("10/minute")
async def extract_job_details(request: Request, body: ExtractJobDetailsRequest):
    job_details = await resume_analyzer.extract_job_details(body.job_description)
    return {"success": True, "jobDetails": _dump(job_details)}


@router.post("/jobs/compare-resume")
@limiter.limit("10/minute")
async def compare_resume(request: Request, body: CompareResumeRequest):
    result = await resume_analyzer.compare_resume_with_job(body.resume_text, body.job_description)
    if result.is_error:
        raise HTTPException(status_code=400, detail=result.error)
    return {"success": True, "data": _dump(result)}


# --- Resume ---


@router.post("/resume/upload", status_code=201)
@limiter.limit("10/minute")
async def upload_resume(
    request: Request,
    resume_file: UploadFile = File(...),
    job_description: str = Form(...),
    store: ResumeStore = Depends(get_resume_store),
):
    if not job_description.strip():
        raise HTTPException(status_code=400, detail="Job description is required")

    resume_text = await _read_upload(resume_file)
    analysis = await resume_analyzer.compare_resume_with_job(resume_text, job_description)
    if analysis.is_error:
        raise HTTPException(status_code=400, detail=analysis.error)

    stored = store.store(resume_file.filename, resume_text)
    info = ResumeInfo(file_name=stored.file_name, resume_id=stored.id, word_count=stored.word_count)
    return {
        "success": True,
        "data": {
            "analysisResult": _dump(analysis),
            "resumeText": resume_text,
            "resumeInfo": _dump(info),
        },
    }


@router.post("/resume/upload-only", status_code=201)
async def upload_resume_only(
    resume_file: UploadFile = File(...),
    store: ResumeStore = Depends(get_resume_store),
):
    resume_text = await _read_upload(resume_file)
    stored = store.store(resume_file.filename, resume_text)
    info = ResumeInfo(file_name=stored.file_name, resume_id=stored.id, word_count=stored.word_count)
    return {
        "success": True,
        "data": {"resumeId": stored.id, "resumeInfo": _dump(info)},
        "message": "Resume uploaded successfully",
    }


@router.post("/resume/analyze")
@limiter.limit("10/minute")
async def analyze_stored_resume(
    request: Request,
    body: AnalyzeResumeRequest,
    store: ResumeStore = Depends(get_resume_store),
):
    resume = store.get_by_id(body.resume_id) or store.get(body.resume_id)
    if resume is None:
        raise HTTPException(status_code=404, detail="Resume not found")

    analysis = await resume_analyzer.compare_resume_with_job(resume.text, body.job_description)
    if analysis.is_error:
        raise HTTPException(status_code=400, detail=analysis.error)
    return {
        "success": True,
        "data": {"analysisResult": _dump(analysis), "resumeText": resume.text},
        "message": "Resume analyzed successfully",
    }


@router.post("/resume/structure")
async def structure_resume(body: StructureResumeRequest):
    structured = resume_analyzer.structure_resume(body.resume_text)
    return {"success": True, "data": _dump(structured)}


@router.post("/resume/generate-ats")
@limiter.limit("10/minute")
async def generate_ats_resume(
    request: Request,
    body: GenerateATSResumeRequest,
    store: ResumeStore = Depends(get_resume_store),
):
    optimized = await resume_analyzer.generate_ats_resume(
        body.resume_text, body.job_description, body.comparison_result
    )
    if body.resume_file_name:
        store.store_optimized(body.resume_file_name, optimized.optimized_resume)
    return {"success": True, "data": _dump(optimized)}


@router.get("/resume/history")
async def resume_history(store: ResumeStore = Depends(get_resume_store)):
    history = []
    for resume in store.list_originals():
        optimized = store.get_optimized(resume.file_name)
        history.append(ResumeHistoryItem(
            id=resume.id,
            file_name=resume.file_name,
            uploaded_at=resume.created_at,
            has_optimized_version=optimized is not None,
            optimized_resume_id=optimized.id if optimized else None,
        ))
    return {"success": True, "data": [_dump(item) for item in history]}


@router.post("/resume/cleanup")
async def cleanup_resume(body: CleanupRequest, store: ResumeStore = Depends(get_resume_store)):
    cleaned = store.delete(body.resume_id)
    return {
        "success": True,
        "data": {"cleaned": cleaned},
        "message": "Temporary resume cleaned up successfully",
    }
