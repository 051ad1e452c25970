"""Pydantic models for Git tool requests and results"""

from enum import Enum
from typing import Annotated, Any, Literal, Mapping, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from ..errors import InvalidRequest


class GitOperation(str, Enum):
    """Operations the tool accepts, matched exactly by name"""

    CLONE = "clone"
    STATUS = "status"
    LOG = "log"
    DIFF = "diff"
    ADD = "add"
    COMMIT = "commit"
    PUSH = "push"
    PULL = "pull"
    BRANCH = "branch"
    CHECKOUT = "checkout"
    INIT = "init"


OPERATION_NAMES = tuple(op.value for op in GitOperation)


class GitRequest(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    path: Optional[str] = None


class LogOptions(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    # Only real JSON integers and booleans are honoured
    limit: Optional[StrictInt] = None
    oneline: StrictBool = False


class DiffOptions(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    cached: StrictBool = False


class CloneRequest(GitRequest):
    operation: Literal["clone"] = "clone"
    repository: str = Field(min_length=1)


class StatusRequest(GitRequest):
    operation: Literal["status"] = "status"


class LogRequest(GitRequest):
    operation: Literal["log"] = "log"
    options: Optional[LogOptions] = None


class DiffRequest(GitRequest):
    operation: Literal["diff"] = "diff"
    options: Optional[DiffOptions] = None


class AddRequest(GitRequest):
    operation: Literal["add"] = "add"
    files: Optional[tuple[str, ...]] = None

    @field_validator("files", mode="before")
    @classmethod
    def _normalize_files(cls, value: Any) -> Any:
        # A bare string names one file; non-string members of a list are skipped
        if value is None:
            return None
        if isinstance(value, str):
            return (value,)
        if isinstance(value, (list, tuple)):
            return tuple(item for item in value if isinstance(item, str))
        raise ValueError("invalid files parameter type")


class CommitRequest(GitRequest):
    operation: Literal["commit"] = "commit"
    message: str = Field(min_length=1)


class PushRequest(GitRequest):
    operation: Literal["push"] = "push"


class PullRequest(GitRequest):
    operation: Literal["pull"] = "pull"


class BranchRequest(GitRequest):
    operation: Literal["branch"] = "branch"
    branch: Optional[str] = None


class CheckoutRequest(GitRequest):
    operation: Literal["checkout"] = "checkout"
    branch: str = Field(min_length=1)


class InitRequest(GitRequest):
    operation: Literal["init"] = "init"


OperationRequest = Annotated[
    Union[
        CloneRequest,
        StatusRequest,
        LogRequest,
        DiffRequest,
        AddRequest,
        CommitRequest,
        PushRequest,
        PullRequest,
        BranchRequest,
        CheckoutRequest,
        InitRequest,
    ],
    Field(discriminator="operation"),
]

_request_adapter: TypeAdapter = TypeAdapter(OperationRequest)


class OperationResult(BaseModel):
    """Outcome of a single git invocation"""

    model_config = ConfigDict(frozen=True)

    operation: str
    output: str = ""
    error: Optional[str] = None
    path: str


# Friendlier wording for the fields an operation cannot run without
REQUIRED_FIELD_MESSAGES = {
    "clone": ("repository", "repository URL is required for clone operation"),
    "commit": ("message", "commit message is required"),
    "checkout": ("branch", "branch name is required for checkout operation"),
}


def _describe_validation_error(operation: str, error: ValidationError) -> str:
    details = []
    for item in error.errors():
        # The first location element is the discriminator tag
        loc = [str(part) for part in item["loc"][1:]]
        field = loc[0] if loc else ""
        required = REQUIRED_FIELD_MESSAGES.get(operation)
        if required and field == required[0]:
            return required[1]
        message = item["msg"]
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        details.append(f"{'.'.join(loc)}: {message}" if loc else message)
    return f"invalid arguments for {operation} operation: " + "; ".join(details)


def parse_request(arguments: Mapping[str, Any]) -> OperationRequest:
    """Turn a loosely-typed argument mapping into a typed request.

    The operation name is checked by exact match before anything else, so an
    unknown operation never reaches model validation.

    Raises:
        InvalidRequest: operation missing or unknown, or arguments invalid
    """
    if not isinstance(arguments, Mapping):
        raise InvalidRequest("arguments must be an object")

    operation = arguments.get("operation")
    if not isinstance(operation, str) or not operation:
        raise InvalidRequest("operation parameter is required")
    if operation not in OPERATION_NAMES:
        raise InvalidRequest(f"unsupported operation: {operation}")

    try:
        return _request_adapter.validate_python(dict(arguments))
    except ValidationError as e:
        raise InvalidRequest(
            _describe_validation_error(operation, e), operation=operation
        ) from e
