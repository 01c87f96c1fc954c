from typing import Any

from pydantic import BaseModel

from livescore_cms.components.redirects import RedirectRule


# --- Redirects ---
class RedirectRuleModel(BaseModel):
    id: str
    source: str
    destination: str
    type: int
    is_active: bool
    hits: int
    created_at: str
    updated_at: str


def redirect_to_model(rule: RedirectRule) -> RedirectRuleModel:
    return RedirectRuleModel(
        id=str(rule.id),
        source=rule.source,
        destination=rule.destination,
        type=rule.type,
        is_active=rule.is_active,
        hits=rule.hits,
        created_at=rule.created_at.isoformat(),
        updated_at=rule.updated_at.isoformat(),
    )


# --- Errors ---
class ValidationErrorModel(BaseModel):
    code: str
    message: str
    field: str | None = None


class ValidationErrorResponse(BaseModel):
    errors: list[ValidationErrorModel]


def serialize_errors(errors: list[Any]) -> list[dict[str, Any]]:
    """Serialize component validation errors (code/message/field dataclasses)."""
    return [{"code": e.code, "message": e.message, "field": e.field} for e in errors]
