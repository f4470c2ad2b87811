import json
import time
from typing import Any, Optional
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from app.database import get_db
from app.core.config import settings
from app.services.voice_context import voice_context_service, BusinessNotFound
from app.utils.phone import clean_phone_number, extract_to_number, extract_extension, extract_program_id
from app.core.logging_config import logger

router = APIRouter()

# The voice provider calls these from its own origin
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


async def _read_tool_payload(request: Request) -> Any:
    """
    Decode a tool-call body. Anything that is not JSON is taken to be the
    phone number itself.
    """
    raw = await request.body()
    try:
        payload = json.loads(raw)
    except ValueError:
        payload = None
    if isinstance(payload, (dict, str)):
        return payload

    # Bare digits decode as a JSON number
    text = raw.decode("utf-8", errors="replace").strip()
    logger.info(f"Received non-JSON context body: {text!r}")
    return {"to_number": text or None}


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


def _timed_response(content: Any, status_code: int, started: float, cors: bool = False) -> JSONResponse:
    duration = _elapsed_ms(started)
    if status_code == status.HTTP_200_OK and duration > settings.CONTEXT_LATENCY_TARGET_MS:
        logger.warning(
            f"Business context response time ({duration}ms) exceeds "
            f"{settings.CONTEXT_LATENCY_TARGET_MS}ms target"
        )
    headers = {"X-Response-Time": f"{duration}ms"}
    if cors:
        headers.update(CORS_HEADERS)
    return JSONResponse(content=content, status_code=status_code, headers=headers)


@router.post("/vapi-context")
async def vapi_context(request: Request, db: Session = Depends(get_db)):
    """
    Return the business answering the dialled number.

    Accepts the number as {"to_number"}, {"phoneNumber": {"number"}},
    {"phoneNumber"}, {"number"}, any of those under "arguments", or a raw
    string body.
    """
    body = await _read_tool_payload(request)
    to_number = extract_to_number(body)
    logger.info(f"Voice context request received: to_number={to_number}")

    if not to_number:
        logger.warning(f"No phone number provided in voice context request: {body!r}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "to_number or phoneNumber.number is required", "received": body},
            headers=CORS_HEADERS,
        )

    try:
        context = voice_context_service.get_context_by_number(db, to_number)
    except BusinessNotFound:
        logger.warning(f"Business not found for phone number: {to_number}")
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": "Business not found for phone number", "to_number": to_number},
            headers=CORS_HEADERS,
        )
    except SQLAlchemyError as e:
        logger.error(f"Error fetching business for {to_number}: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to fetch business context", "details": str(e)},
            headers=CORS_HEADERS,
        )

    logger.info(
        f"Business context found for {to_number}: id={context.id}, name={context.name}, "
        f"hours={bool(context.hours)}, services={bool(context.services)}, faqs={bool(context.faqs)}"
    )
    return JSONResponse(content=context.model_dump(mode="json"), headers=CORS_HEADERS)


@router.get("/vapi-context")
def vapi_context_health():
    return JSONResponse(
        content={
            "status": "ok",
            "service": "vapi-context",
            "description": "Returns business context for Vapi calls",
        },
        headers=CORS_HEADERS,
    )


@router.options("/vapi-context")
@router.options("/business-context")
def context_preflight():
    return JSONResponse(content={"status": "ok"}, headers=CORS_HEADERS)


def _business_context_response(
    db: Session,
    to_number: Optional[str],
    extension: Optional[str],
    program_id: Optional[str],
    started: float,
    cors: bool
) -> JSONResponse:
    if not to_number:
        return _timed_response({"error": "to_number is required"}, status.HTTP_400_BAD_REQUEST, started, cors)

    try:
        context = voice_context_service.get_business_context(
            db, to_number, extension=extension, program_id=program_id
        )
    except BusinessNotFound:
        return _timed_response(
            {"error": "Business not found for phone number", "to_number": to_number},
            status.HTTP_404_NOT_FOUND, started, cors
        )
    except SQLAlchemyError as e:
        logger.error(f"Business context error: {e}")
        return _timed_response(
            {"error": "Failed to fetch business context", "details": str(e)},
            status.HTTP_500_INTERNAL_SERVER_ERROR, started, cors
        )

    return _timed_response(context.as_payload(), status.HTTP_200_OK, started, cors)


@router.get("/business-context")
def get_business_context(
    to_number: Optional[str] = None,
    extension: Optional[str] = None,
    program_id: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """
    Business context for a phone number, optionally narrowed to a program
    by extension or program_id. Tries several formats of the number.
    """
    started = time.perf_counter()
    return _business_context_response(
        db, clean_phone_number(to_number), extension, program_id, started, cors=False
    )


@router.post("/business-context")
async def post_business_context(request: Request, db: Session = Depends(get_db)):
    """
    Same lookup as GET, fed from a voice-provider tool call body.
    """
    started = time.perf_counter()
    body = await _read_tool_payload(request)
    return _business_context_response(
        db,
        extract_to_number(body),
        extract_extension(body),
        extract_program_id(body),
        started,
        cors=True,
    )
