"""Request body reading and schema validation for mutating routes."""

import json
from typing import Any, Callable, Type, TypeVar

from fastapi import Request
from pydantic import BaseModel

from ..exceptions import MalformedBodyError

SchemaT = TypeVar("SchemaT", bound=BaseModel)


async def read_json_body(request: Request) -> Any:
    """Read the whole request body and decode it as JSON.

    An empty body decodes to ``{}`` so that schema validation, not body
    parsing, reports what is missing.

    Raises:
        MalformedBodyError: If the body is not valid JSON
    """
    body = await request.body()
    if not body.strip():
        return {}
    try:
        return json.loads(body)
    except (ValueError, RecursionError) as e:
        raise MalformedBodyError() from e


def validated_body(schema: Type[SchemaT]) -> Callable[[Request], Any]:
    """Build a dependency that parses the body and validates it against ``schema``.

    A schema failure raises ``pydantic.ValidationError`` carrying every field
    error at once.
    """

    async def dependency(request: Request) -> SchemaT:
        payload = await read_json_body(request)
        return schema.model_validate(payload)

    return dependency
