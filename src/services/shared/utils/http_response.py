import json

from pydantic import BaseModel, ValidationError

from services.shared.domain.exception import (
    BusinessRuleViolationException,
    ConflictException,
    DomainException,
    PartialFailureException,
    PersistenceException,
    PolicyViolationException,
    ResourceNotFoundException,
    ServiceUnavailableException,
    UnrecoverableException,
)

# 例外カテゴリ → HTTP ステータス（上から順に判定）
_STATUS_BY_CATEGORY: tuple[tuple[type[DomainException], int], ...] = (
    (ResourceNotFoundException, 404),
    (ConflictException, 409),
    (BusinessRuleViolationException, 400),
    (PolicyViolationException, 400),
    (ServiceUnavailableException, 503),
    (PartialFailureException, 502),
    (UnrecoverableException, 500),
    (PersistenceException, 500),
)


class ErrorResponse(BaseModel):
    """エラーレスポンスモデル"""

    status: str = "error"
    error_code: str
    message: str
    details: list | None = None


def api_response(status_code: int, body: dict) -> dict:
    """API Gateway Lambda Proxy Integration のレスポンス形式を生成する"""
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, default=str),
    }


def status_code_for(exc: DomainException) -> int:
    for category, status_code in _STATUS_BY_CATEGORY:
        if isinstance(exc, category):
            return status_code
    return 500


def error_response(exc: DomainException) -> dict:
    """ドメイン例外をエラーレスポンスに変換する"""
    body = ErrorResponse(
        error_code=exc.error_code,
        message=exc.message or str(exc),
        details=exc.details,
    ).model_dump(exclude_none=True)
    return api_response(status_code_for(exc), body)


def validation_error_response(exc: ValidationError) -> dict:
    """リクエストのバリデーションエラーを 400 に変換する"""
    body = ErrorResponse(
        error_code="VALIDATION_ERROR",
        message="Invalid request",
        details=[
            {"loc": list(err["loc"]), "msg": err["msg"]}
            for err in exc.errors(include_url=False)
        ],
    ).model_dump(exclude_none=True)
    return api_response(400, body)


def bad_request_response(message: str) -> dict:
    body = ErrorResponse(error_code="BAD_REQUEST", message=message)
    return api_response(400, body.model_dump(exclude_none=True))


def internal_error_response() -> dict:
    body = ErrorResponse(error_code="INTERNAL_ERROR", message="Internal server error")
    return api_response(500, body.model_dump(exclude_none=True))
