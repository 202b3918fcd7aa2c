from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, StringConstraints, model_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from src.app.services.sanitizer import sanitize_json

DisplayName = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True,
        min_length=2,
        max_length=32,
        pattern=r"^[a-zA-Z0-9\s._-]+$",
    ),
]

Username = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True,
        min_length=3,
        max_length=32,
        pattern=r"^[a-zA-Z0-9._-]+$",
    ),
]

Bio = Annotated[str, StringConstraints(strip_whitespace=True, max_length=280)]


class RequestModel(BaseModel):
    """
    Base for HTTP request payloads.

    Fields are read from camelCase keys (snake_case also accepted) and the
    decoded body is stripped of prototype-pollution keys before validation.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def strip_forbidden_keys(cls, data: Any) -> Any:
        return sanitize_json(data)


def passwords_match(password: Optional[str], confirmation: str) -> str:
    if confirmation != password:
        raise PydanticCustomError("password_mismatch", "Passwords don't match")
    return confirmation
