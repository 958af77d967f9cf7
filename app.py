from __future__ import annotations
import logging
import math
import traceback
from typing import List, Optional
from contextlib import asynccontextmanager
from fastapi import FastAPI, File, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
import uvicorn

from errors import ResumeAnalyzerError
from schemas import CandidateRecord, ErrorResponse
from settings import Settings
from parsers.extract import UploadedFile
from matching.analyzer import CompletionClient, analyze_fit
from matching.llm_client import ChatCompletionClient

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle: report configuration, release the HTTP session."""
    settings: Settings = app.state.settings
    logger.info("Using model %s at %s", settings.model, settings.base_url)
    if not settings.api_key:
        logger.warning("PERPLEXITY_API_KEY is not set; every resume will get the fallback analysis.")

    yield

    if app.state.owns_client:
        app.state.llm_client.close()
    logger.info("Application shutting down.")


def _error(status_code: int, message: str) -> JSONResponse:
    body = ErrorResponse(error=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def _server_error(exc: Exception, debug: bool) -> JSONResponse:
    body = ErrorResponse(
        error="Processing failed",
        details=str(exc),
        stack=traceback.format_exc() if debug else None,
    )
    return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))


def _is_valid_score(score) -> bool:
    try:
        return math.isfinite(score)
    except OverflowError:
        return False


def _names(files: Optional[List[UploadFile]]) -> List[str]:
    return [f.filename or "" for f in files or []]


def create_app(settings: Optional[Settings] = None, client: Optional[CompletionClient] = None) -> FastAPI:
    """Build the API with an explicit configuration and completion client."""
    settings = settings or Settings.from_env()

    app = FastAPI(title="Resume Analyzer API", lifespan=lifespan)
    app.state.settings = settings
    app.state.owns_client = client is None
    app.state.llm_client = client or ChatCompletionClient.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_upload(request: Request, exc: RequestValidationError):
        logger.error("Rejected malformed upload to %s: %s", request.url.path, exc.errors())
        return _error(400, "Missing job description or resumes.")

    # -------------------------------------------------------------------
    # Routes
    # -------------------------------------------------------------------
    @app.get("/", response_class=PlainTextResponse)
    def welcome():
        return "Welcome to the Resume Analyzer API"

    @app.post("/analyze", response_model=List[CandidateRecord])
    async def analyze(
        request: Request,
        job_description: Optional[List[UploadFile]] = File(None, alias="jobDescription"),
        resumes: Optional[List[UploadFile]] = File(None),
    ):
        """Rank the uploaded resumes against the job description."""
        settings: Settings = request.app.state.settings
        llm_client: CompletionClient = request.app.state.llm_client

        try:
            logger.info("Received files: jobDescription=%s resumes=%s", _names(job_description), _names(resumes))
            if not job_description or not resumes:
                return _error(400, "Missing job description or resumes.")
            if len(job_description) > 1:
                return _error(400, "Only one job description file is allowed.")
            if len(resumes) > settings.max_resumes:
                return _error(400, f"At most {settings.max_resumes} resumes are allowed.")

            jd_file = await UploadedFile.from_upload(job_description[0])
            if not jd_file.is_supported:
                return _error(400, "Unsupported job description file type.")
            jd_text = await run_in_threadpool(jd_file.extract)

            candidates: List[CandidateRecord] = []
            for upload in resumes:
                resume = await UploadedFile.from_upload(upload)
                if not resume.is_supported:
                    logger.error("Unsupported resume file type: %s", resume.original_name)
                    continue

                try:
                    resume_text = await run_in_threadpool(resume.extract)
                except ResumeAnalyzerError as e:
                    logger.error("Failed to extract text from %s: %s", resume.original_name, e)
                    continue

                analysis = await run_in_threadpool(analyze_fit, jd_text, resume_text, llm_client)
                if not _is_valid_score(analysis.score):
                    logger.error("Invalid score for resume %s: %r", resume.original_name, analysis.score)
                    continue

                candidates.append(CandidateRecord.from_analysis(resume.original_name, analysis))

            candidates.sort(key=lambda c: c.score, reverse=True)
            return candidates

        except Exception as e:
            logger.exception("Error processing files: %s", e)
            return _server_error(e, settings.debug)

    return app


def main() -> None:
    settings = Settings.from_env()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
