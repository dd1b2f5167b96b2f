# capture_api/main.py

import logging
from typing import Optional
from fastapi import FastAPI, File, Form, Query, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from .agent import answer_questions, parse_questions, resolve_mime_type
from .config import settings
from .docs import CACHE_CONTROL, content_type_for, is_allowed, resolve_doc_path
from .errors import InvalidQuestionsError, MissingInputError
from .schemas import AnalysisResponse, ErrorResponse, StatusResponse

# ==================== LOGGING CONFIGURATION ====================
for handler in logging.root.handlers[:]:
    logging.root.removeHandler(handler)

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
# ===================================================================

logger = logging.getLogger(__name__)

VERSION = "1.0.0"

app = FastAPI(title="Capture Booking Data API", version=VERSION)

# CORS: every response, errors included, carries Access-Control-Allow-Origin: *
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(content={"error": message}, status_code=status_code)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # e.g. `file` sent as a plain text field; answered like any other missing input
    logger.warning(f"{request.method} {request.url.path} - Request validation failed: {exc.errors()}")
    return _error("Missing file or questions", 400)


@app.get("/", response_model=StatusResponse)
async def status():
    logger.info("GET / - Status requested.")
    return StatusResponse(
        service="Capture Booking Data API",
        status="online",
        version=VERSION,
        endpoints=["POST /api/ask", "GET /api/docs?file=<name>"],
    )


@app.post(
    "/api/ask",
    response_model=AnalysisResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def ask(
    file: Optional[UploadFile] = File(None),
    questions: Optional[str] = Form(None),
):
    """
    Analyzes a screenshot with the configured multimodal model.

    Multipart fields:
    - file: the image (PNG, JPEG, GIF, WebP)
    - questions: JSON string array of questions about the image

    Returns one {question, answer} pair per question, in the same order.

    Usage:
    curl "http://localhost:8000/api/ask" -F "file=@checkout.png" -F 'questions=["What is the hotel name?"]'
    """
    logger.info("POST /api/ask - Analysis request received.")
    try:
        image = await file.read() if file is not None else b""
        if not image or not questions or not questions.strip():
            raise MissingInputError("Missing file or questions")

        question_list = parse_questions(questions)
        mime_type = resolve_mime_type(file.content_type, file.filename)
        logger.info(f"Received {file.filename} ({mime_type}) with {len(question_list)} questions")

        # The SDK call blocks; keep it off the event loop
        results = await run_in_threadpool(answer_questions, image, mime_type, question_list)
        return AnalysisResponse(results=results)

    except MissingInputError as e:
        logger.warning(str(e))
        return _error("Missing file or questions", 400)
    except InvalidQuestionsError as e:
        logger.warning(f"Invalid questions format: {e}")
        return _error("Invalid JSON format for questions parameter", 400)
    except Exception as e:
        logger.error("An error occurred during analysis", exc_info=True)
        return _error(str(e) or e.__class__.__name__, 500)


@app.get(
    "/api/docs",
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def docs_file(file: Optional[str] = Query(None)):
    """
    Serves one of the allow-listed documentation files as raw text.
    """
    if not file:
        return _error("File parameter is required", 400)

    if not is_allowed(file):
        return _error("File not found or not allowed", 404)

    file_path = resolve_doc_path(settings.docs_root, file)
    if not file_path.is_file():
        return _error(f"File not found: {file_path}", 404)

    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        logger.error(f"Error serving documentation file: {file_path}", exc_info=True)
        return _error("Internal server error", 500)

    return Response(
        content=content,
        media_type=content_type_for(file),
        headers={"Cache-Control": CACHE_CONTROL},
    )
