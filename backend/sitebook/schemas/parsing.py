"""Input Parsing — turns raw dicts into validated schemas or a typed error.

Invariants:
    - Raw input never reaches the store unparsed
    - Pydantic ValidationError is always mapped to RecordValidationError;
      the first failing field wins
"""

from typing import TypeVar

from pydantic import BaseModel, ValidationError

from sitebook.core.errors import RecordValidationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def parse_input(schema: type[SchemaT], raw: SchemaT | dict) -> SchemaT:
    """Validate raw input against schema; pass through already-validated models."""
    if isinstance(raw, schema):
        return raw
    try:
        return schema.model_validate(raw)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(loc) for loc in first["loc"]) or schema.__name__
        raise RecordValidationError(
            f"Invalid {field}: {first['msg']}", field,
        ) from e
