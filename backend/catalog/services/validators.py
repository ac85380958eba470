"""
请求体校验 - 在业务逻辑之前拒绝不合法字段

The body schema is a pydantic model; its errors are flattened to one
``{'field', 'message', 'value', 'location'}`` entry per field.
"""

from functools import wraps
from typing import Any, Dict, List, Literal

from flask import g, request
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from catalog.errors import ValidationError
from catalog.models.product import Product


class ProductPayload(BaseModel):
    """Writable product fields; unknown keys are dropped."""
    model_config = ConfigDict(extra='ignore', str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=Product.NAME_MAX_LENGTH)
    picture: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    gender: Literal['male', 'female']
    category: Literal['makeup', 'skincare', 'haircare']
    price: float = Field(..., ge=0, allow_inf_nan=False)

    @field_validator('price', mode='before')
    @classmethod
    def price_must_be_numeric(cls, value: Any) -> Any:
        # bool is an int subclass; true/false are not prices
        if isinstance(value, bool):
            raise ValueError('price must be numeric')
        if isinstance(value, int):
            try:
                return float(value)
            except OverflowError:
                raise ValueError('price must be numeric')
        return value


def _field_errors(exc: PydanticValidationError, payload: Dict[str, Any]) -> List[Dict[str, Any]]:
    errors = []
    seen = set()
    for error in exc.errors():
        field = str(error['loc'][0]) if error['loc'] else 'body'
        if field in seen:
            continue
        seen.add(field)
        errors.append({
            'field': field,
            'message': error['msg'],
            'value': payload.get(field),
            'location': 'body'
        })
    return errors


def parse_payload(payload: Any, schema=ProductPayload) -> BaseModel:
    """Validate a request body; raises ValidationError with field errors."""
    if not isinstance(payload, dict):
        payload = {}
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(_field_errors(exc, payload))


def validate_body(schema=ProductPayload):
    """View decorator: reject the request with 400 before the view runs.

    The validated fields are left on ``g.payload``.
    """
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.payload = parse_payload(request.get_json(silent=True), schema).model_dump()
            return view(*args, **kwargs)
        return wrapper
    return decorator
