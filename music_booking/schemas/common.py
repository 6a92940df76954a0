"""
Shared schema base and the uniform response envelope.

Every endpoint answers with::

    {"content": ..., "responseCode": "Success" | "Error",
     "responseDescription": "...", "isSuccess": true | false}

JSON field names are camelCase on the wire and snake_case in Python.
"""

from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ResponseCode(str, Enum):
    SUCCESS = "Success"
    ERROR = "Error"


class Result(CamelModel, Generic[T]):
    content: Optional[T] = None
    response_code: ResponseCode = ResponseCode.SUCCESS
    response_description: str = ""
    is_success: bool = True


def success(content: Any = None, description: str = "Success") -> Result:
    return Result(
        content=content,
        response_code=ResponseCode.SUCCESS,
        response_description=description,
        is_success=True,
    )


def failure(description: str, content: Any = None) -> Result:
    return Result(
        content=content,
        response_code=ResponseCode.ERROR,
        response_description=description,
        is_success=False,
    )
