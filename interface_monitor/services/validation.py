"""Write-time validation for interface log payloads.

Every write path (API create/replace, bulk insert, seeding) goes through
``validate_log_payload`` before touching the database, so enum and
required-field rules do not depend on the storage backend.
"""

from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from interface_monitor.core.errors import ValidationError
from interface_monitor.schemas.interface_log import InterfaceLogCreate


class ValidationResult(BaseModel):
    """Outcome of validating a log payload."""

    payload: InterfaceLogCreate | None = None
    errors: list[str] = []

    @property
    def is_valid(self) -> bool:
        return self.payload is not None and not self.errors

    @property
    def message(self) -> str:
        return "; ".join(self.errors)

    def unwrap(self) -> InterfaceLogCreate:
        """Return the validated payload or raise ValidationError."""
        if not self.is_valid or self.payload is None:
            raise ValidationError(self.message or "Invalid log payload")
        return self.payload


def _describe(error: dict[str, Any]) -> str:
    loc = ".".join(str(part) for part in error.get("loc", ()))
    msg = error.get("msg", "invalid value")
    return f"{loc}: {msg}" if loc else msg


def validate_log_payload(data: Any) -> ValidationResult:
    """Validate a raw payload (dict or model) against the log schema."""
    if isinstance(data, InterfaceLogCreate):
        return ValidationResult(payload=data)
    if not isinstance(data, dict):
        return ValidationResult(errors=["body: expected a JSON object"])

    try:
        payload = InterfaceLogCreate.model_validate(data)
    except PydanticValidationError as e:
        return ValidationResult(errors=[_describe(err) for err in e.errors()])  # type: ignore[arg-type]
    return ValidationResult(payload=payload)
