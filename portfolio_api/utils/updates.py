# portfolio_api/utils/updates.py
from __future__ import annotations

from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from portfolio_api.errors import ValidationError, format_validation_message, validation_errors

EntityT = TypeVar("EntityT", bound=BaseModel)


def changes_of(body: BaseModel) -> Dict[str, Any]:
    """Fields the client actually sent (explicit nulls included)."""
    return body.model_dump(exclude_unset=True)


def apply_changes(entity: EntityT, changes: Dict[str, Any]) -> EntityT:
    """Overlay `changes` on `entity`; omitted fields keep their stored values.
    The merged record is re-validated, so a null on a required field is a 400."""
    merged = {**entity.model_dump(), **changes}
    cls: Type[EntityT] = type(entity)
    try:
        return cls.model_validate(merged)
    except PydanticValidationError as exc:
        errors = validation_errors(exc.errors())
        raise ValidationError(format_validation_message(errors), errors=errors)
