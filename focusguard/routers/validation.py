import math

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse

from focusguard.config import logger
from focusguard.core.security import (
    ErrorCode,
    InvalidReferenceError,
    MAX_TOKEN_LENGTH,
    ValidationFacade,
    get_client_identifier,
    get_validation_facade,
)
from focusguard.schemas import (
    EmbedResponse,
    ErrorDetail,
    SubmissionRequest,
    SubmissionResponse,
    TextValidationRequest,
    TokenResponse,
    UploadMetadataRequest,
    ValidationResponse,
)

router = APIRouter(prefix="/api", tags=["Validation"])


@router.post("/submissions", response_model=SubmissionResponse)
async def submit_video_link(
    payload: SubmissionRequest,
    request: Request,
    facade: ValidationFacade = Depends(get_validation_facade),
) -> JSONResponse:
    """Validate a video link and resolve it to an embed URL."""
    identifier = get_client_identifier(request)
    result = facade.validate_submission(
        payload.url, identifier, request_id=getattr(request.state, "request_id", None)
    )

    body = SubmissionResponse(
        accepted=result.accepted,
        sanitized=result.sanitized_value,
        errors=[ErrorDetail.from_code(code) for code in result.errors],
        reference=result.reference,
        embed_url=facade.build_embed_url(result.reference) if result.reference else None,
    )

    decision = result.rate_limit
    headers = {}
    if decision is not None:
        reset = str(max(math.ceil(decision.reset_after), 1))
        headers = {
            "X-RateLimit-Limit": str(facade.rate_limiter.limit),
            "X-RateLimit-Remaining": str(decision.remaining),
            "X-RateLimit-Reset": reset,
        }
        if not decision.allowed:
            headers["Retry-After"] = reset

    if ErrorCode.RATE_LIMITED in result.errors:
        status_code = status.HTTP_429_TOO_MANY_REQUESTS
    elif result.accepted:
        status_code = status.HTTP_200_OK
    else:
        status_code = status.HTTP_422_UNPROCESSABLE_ENTITY

    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json"),
        headers=headers,
    )


@router.post("/uploads/validate", response_model=ValidationResponse)
async def validate_upload(
    payload: UploadMetadataRequest,
    request: Request,
    facade: ValidationFacade = Depends(get_validation_facade),
) -> ValidationResponse:
    """Validate declared upload metadata before any bytes are sent."""
    result = facade.validate_file_upload(
        payload.to_candidate(), request_id=getattr(request.state, "request_id", None)
    )
    return ValidationResponse.from_result(result)


@router.post("/text/validate", response_model=ValidationResponse)
async def validate_text(
    payload: TextValidationRequest,
    facade: ValidationFacade = Depends(get_validation_facade),
) -> ValidationResponse:
    """Validate and sanitize a piece of free text, a link or a filename."""
    result = facade.validate_text(payload.value, payload.kind)
    return ValidationResponse.from_result(result)


@router.get("/tokens", response_model=TokenResponse)
async def create_token(
    length: int = Query(default=32, ge=1, le=MAX_TOKEN_LENGTH),
    facade: ValidationFacade = Depends(get_validation_facade),
) -> TokenResponse:
    """Issue a random alphanumeric token."""
    token = facade.generate_token(length)
    return TokenResponse(token=token.value, strength=token.strength)


@router.get("/embed/{reference}", response_model=EmbedResponse)
async def get_embed_url(
    reference: str,
    facade: ValidationFacade = Depends(get_validation_facade),
) -> EmbedResponse:
    """Build the embed URL for a known video reference."""
    try:
        embed_url = facade.build_embed_url(reference)
    except InvalidReferenceError as e:
        logger.info("Rejected embed request: %s", e.message)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    return EmbedResponse(reference=reference, embed_url=embed_url)
