"""Book Schemas: Pydantic models at the API boundary.

Invariants:
    - BookPayload is the single contract for create and update (both full replacements)
    - Strict mode: no coercion, "2017" is not an integer and True is not an integer
    - Integral floats (2017.0) are accepted for integer fields and stored as int
    - pages and year fit a 4-byte INTEGER column
    - Unknown properties are ignored and never persisted
    - BookRead mirrors every column of the books table, nothing computed
"""

from pydantic import (
    BaseModel, ConfigDict, Field, ValidationError, field_validator,
)

INT4_MIN = -2_147_483_648
INT4_MAX = 2_147_483_647

_TYPE_NAMES = {
    "string_type": "string",
    "int_type": "integer",
    "model_type": "object",
    "dict_type": "object",
}


class BookPayload(BaseModel):
    """Book request body: every field required, checked without coercion."""
    model_config = ConfigDict(strict=True, extra="ignore")

    isbn: str = Field(min_length=1)
    amazon_url: str
    author: str
    language: str
    pages: int = Field(gt=0, le=INT4_MAX)
    publisher: str
    title: str
    year: int = Field(ge=INT4_MIN, le=INT4_MAX)

    @field_validator("pages", "year", mode="before")
    @classmethod
    def integral_float_to_int(cls, v):
        if isinstance(v, float) and v.is_integer():
            return int(v)
        return v


class BookRead(BaseModel):
    """Book response: one row of the books table."""
    model_config = ConfigDict(from_attributes=True)

    isbn: str
    amazon_url: str
    author: str
    language: str
    pages: int
    publisher: str
    title: str
    year: int


def format_validation_errors(exc: ValidationError) -> list[str]:
    """One message per violation, in field order."""
    return [_format_error(error) for error in exc.errors()]


def _format_error(error: dict) -> str:
    loc = [str(part) for part in error["loc"]]
    path = ".".join(["instance", *loc])
    kind = error["type"]
    ctx = error.get("ctx", {})

    if kind == "missing":
        parent = ".".join(["instance", *loc[:-1]])
        return f'{parent} requires property "{loc[-1]}"'
    if kind in _TYPE_NAMES:
        return f"{path} is not of a type(s) {_TYPE_NAMES[kind]}"
    if kind == "greater_than":
        return f"{path} must be greater than {ctx['gt']}"
    if kind == "greater_than_equal":
        return f"{path} must be greater than or equal to {ctx['ge']}"
    if kind == "less_than_equal":
        return f"{path} must be less than or equal to {ctx['le']}"
    if kind == "string_too_short":
        return f"{path} does not meet minimum length of {ctx['min_length']}"
    return f"{path}: {error['msg']}"
