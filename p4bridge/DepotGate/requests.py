"""
DepotGate request models.

Declared parameter constraints for each depot operation. Parsing a request
collects every violation before any command runs.
"""

from __future__ import annotations

from typing import Any, ClassVar, Dict, List, Literal, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from p4bridge.CommandGate.security import check_token
from p4bridge.shared.gate import ValidationFailed, ValidationIssue


DEFAULT_DEPOT_PATH = "//depot/..."
DEFAULT_MAX_FILES = 100
DEFAULT_MAX_CHANGES = 20
DEFAULT_MAX_HISTORY = 10


class DepotRequest(BaseModel):
    """Base for operation parameters; unknown parameters are ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    # field alias -> human-readable violation message
    messages: ClassVar[Dict[str, str]] = {}


def _token(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    is_valid, error = check_token(value)
    if not is_valid:
        raise ValueError(error)
    return value


class FileListRequest(DepotRequest):
    path: Optional[str] = None
    max_results: Optional[int] = Field(default=None, alias="max", ge=1, le=1000)

    messages: ClassVar[Dict[str, str]] = {
        "path": "Path must be a string",
        "max": "Max must be between 1 and 1000",
    }

    @field_validator("path")
    @classmethod
    def check_path(cls, value: Optional[str]) -> Optional[str]:
        return _token(value)


class FileContentRequest(DepotRequest):
    path: str = Field(min_length=1)
    revision: Optional[int] = None

    messages: ClassVar[Dict[str, str]] = {
        "path": "Path is required and must be a string",
        "revision": "Revision must be an integer",
    }

    @field_validator("path")
    @classmethod
    def check_path(cls, value: Optional[str]) -> Optional[str]:
        return _token(value)


class FileHistoryRequest(DepotRequest):
    path: str = Field(min_length=1)
    max_results: Optional[int] = Field(default=None, alias="max", ge=1, le=100)

    messages: ClassVar[Dict[str, str]] = {
        "path": "Path is required and must be a string",
        "max": "Max must be between 1 and 100",
    }

    @field_validator("path")
    @classmethod
    def check_path(cls, value: Optional[str]) -> Optional[str]:
        return _token(value)


class ChangeListRequest(DepotRequest):
    max_results: Optional[int] = Field(default=None, alias="max", ge=1, le=100)
    status: Optional[Literal["pending", "submitted"]] = None
    user: Optional[str] = None

    messages: ClassVar[Dict[str, str]] = {
        "max": "Max must be between 1 and 100",
        "status": "Status must be pending or submitted",
        "user": "User must be a string",
    }

    @field_validator("user")
    @classmethod
    def check_user(cls, value: Optional[str]) -> Optional[str]:
        return _token(value)


class ChangeDetailRequest(DepotRequest):
    change_id: int = Field(alias="changeId", ge=0)

    messages: ClassVar[Dict[str, str]] = {
        "changeId": "Change ID must be a non-negative integer",
    }


class SyncRequest(DepotRequest):
    path: Optional[str] = None
    force: Optional[bool] = None

    messages: ClassVar[Dict[str, str]] = {
        "path": "Path must be a string",
        "force": "Force must be a boolean",
    }

    @field_validator("path")
    @classmethod
    def check_path(cls, value: Optional[str]) -> Optional[str]:
        return _token(value)


RequestT = TypeVar("RequestT", bound=DepotRequest)


def issues_from_error(
    error: ValidationError,
    messages: Optional[Dict[str, str]] = None,
) -> List[ValidationIssue]:
    """Convert a pydantic ValidationError into ordered ValidationIssues."""
    messages = messages or {}
    issues = []
    for err in error.errors():
        loc = [str(part) for part in err.get("loc", ())]
        field = loc[-1] if loc else "request"
        detail = err.get("msg", "Invalid value")
        message = messages.get(field)
        message = f"{message} ({detail})" if message else detail
        value = None if err.get("type") == "missing" else err.get("input")
        issues.append(ValidationIssue(
            field=field,
            message=message,
            type=err.get("type", "value_error"),
            value=value,
        ))
    return issues


def parse_request(model: Type[RequestT], params: Mapping[str, Any]) -> RequestT:
    """
    Validate raw request parameters against an operation's constraints.

    Raises:
        ValidationFailed: With every violated constraint
    """
    try:
        return model.model_validate(dict(params))
    except ValidationError as e:
        raise ValidationFailed(issues_from_error(e, model.messages)) from None


__all__ = [
    "DEFAULT_DEPOT_PATH",
    "DEFAULT_MAX_CHANGES",
    "DEFAULT_MAX_FILES",
    "DEFAULT_MAX_HISTORY",
    "ChangeDetailRequest",
    "ChangeListRequest",
    "DepotRequest",
    "FileContentRequest",
    "FileHistoryRequest",
    "FileListRequest",
    "SyncRequest",
    "issues_from_error",
    "parse_request",
]
