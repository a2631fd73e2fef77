# portfolio_api/repositories/base.py
"""
Generic repository: a uniform CRUD contract over one table per entity type.

Entities are pydantic models; rows are SQLAlchemy ORM objects whose composite
fields (lists, nested objects) live in JSON text columns. Subclasses only
declare the model, the entity and which columns hold JSON.
"""
from __future__ import annotations

import copy
import json
import logging
import uuid
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Dict, Generic, List, NamedTuple, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql import func as sa_func

from portfolio_api.database import Base
from portfolio_api.errors import DatabaseError

log = logging.getLogger("repositories")

EntityT = TypeVar("EntityT", bound=BaseModel)


@contextmanager
def guarded(db: Session, table: str, action: str):
    """Roll back and re-raise any SQLAlchemy failure as DatabaseError."""
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        log.error("%s %s failed: %s", table, action, exc)
        raise DatabaseError(f"Failed to {action} {table}") from exc


# ===========================
# JSON column helpers
# ===========================
def generate_id() -> str:
    return str(uuid.uuid4())


def encode_json(value: Any) -> str:
    """Serialize a composite field for a JSON text column (order preserved)."""
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    elif isinstance(value, (list, tuple)):
        value = [v.model_dump(mode="json") if isinstance(v, BaseModel) else v for v in value]
    return json.dumps(value, ensure_ascii=False)


def decode_json(raw: str) -> Any:
    return json.loads(raw)


class DecodeIssue(NamedTuple):
    """A JSON column that could not be read and was replaced by its default."""
    row_id: str
    field: str
    reason: str


# ===========================
# Contract
# ===========================
class Repository(ABC, Generic[EntityT]):
    @abstractmethod
    def find_all(self) -> List[EntityT]: ...

    @abstractmethod
    def find_by_id(self, id: str) -> Optional[EntityT]: ...

    @abstractmethod
    def create(self, entity: EntityT) -> EntityT: ...

    @abstractmethod
    def update(self, id: str, entity: EntityT) -> EntityT: ...

    @abstractmethod
    def delete(self, id: str) -> bool: ...


# ===========================
# SQLAlchemy implementation
# ===========================
class SqlRepository(Repository[EntityT]):
    model: Type[Base]
    entity: Type[EntityT]
    # JSON column name -> value used when the column is NULL or unreadable
    json_fields: Dict[str, Any] = {}
    order_by: Sequence[Any] = ()

    def __init__(self, db: Session):
        self.db = db
        self.decode_issues: List[DecodeIssue] = []

    # ---- error boundary ----
    def _guard(self, action: str):
        return guarded(self.db, self.model.__tablename__, action)

    # ---- row <-> entity ----
    def _identity(self, entity: EntityT) -> str:
        return getattr(entity, "id")

    def _decode_field(self, row_id: str, name: str, raw: Optional[str]) -> Any:
        default = self.json_fields[name]
        if raw is None:
            return copy.deepcopy(default)
        try:
            value = decode_json(raw)
        except ValueError as exc:
            return self._degrade(row_id, name, f"invalid JSON: {exc}")
        expected = list if isinstance(default, list) or default is None else type(default)
        if not isinstance(value, expected):
            return self._degrade(row_id, name, f"expected {expected.__name__}, got {type(value).__name__}")
        return value

    def _degrade(self, row_id: str, name: str, reason: str) -> Any:
        issue = DecodeIssue(str(row_id), name, reason)
        self.decode_issues.append(issue)
        log.warning("Unreadable %s.%s for row %s (%s); using default",
                    self.model.__tablename__, name, row_id, reason)
        return copy.deepcopy(self.json_fields[name])

    def _to_entity(self, row) -> EntityT:
        data: Dict[str, Any] = {}
        for name in self.entity.model_fields:
            raw = getattr(row, name)
            data[name] = self._decode_field(row.id, name, raw) if name in self.json_fields else raw
        try:
            return self.entity.model_validate(data)
        except PydanticValidationError as exc:
            # Shape is right but items are not: drop the offending composite values, keep the row
            bad = {err["loc"][0] for err in exc.errors() if err.get("loc")}
            for name in self.json_fields:
                if name in bad:
                    data[name] = self._degrade(row.id, name, "items do not match the entity shape")
            return self.entity.model_validate(data)

    def _to_columns(self, entity: EntityT) -> Dict[str, Any]:
        values = entity.model_dump()
        for name in self.json_fields:
            if name in values:
                value = getattr(entity, name)
                values[name] = None if value is None else encode_json(value)
        return values

    def _query(self):
        return self.db.query(self.model)

    # ---- CRUD ----
    def find_all(self) -> List[EntityT]:
        self.decode_issues = []
        with self._guard("read"):
            rows = self._query().order_by(*self.order_by).all()
        return [self._to_entity(row) for row in rows]

    def find_by_id(self, id: str) -> Optional[EntityT]:
        self.decode_issues = []
        with self._guard("read"):
            row = self._query().filter(self.model.id == id).first()
        return self._to_entity(row) if row is not None else None

    def create(self, entity: EntityT) -> EntityT:
        values = self._to_columns(entity)
        values["id"] = self._identity(entity)
        with self._guard("create"):
            self.db.add(self.model(**values))
            self.db.commit()
        return entity

    def update(self, id: str, entity: EntityT) -> EntityT:
        values = self._to_columns(entity)
        values.pop("id", None)
        values["updated_at"] = sa_func.now()
        with self._guard("update"):
            self._query().filter(self.model.id == id).update(values, synchronize_session=False)
            self.db.commit()
        return entity

    def delete(self, id: str) -> bool:
        with self._guard("delete"):
            removed = self._query().filter(self.model.id == id).delete(synchronize_session=False)
            self.db.commit()
        return removed > 0


class SingletonRepository(SqlRepository[EntityT]):
    """A table holding exactly one logical record under a well-known key."""

    key = "primary"

    def _identity(self, entity: EntityT) -> str:
        return self.key

    def get(self) -> Optional[EntityT]:
        return self.find_by_id(self.key)

    def save(self, entity: EntityT) -> EntityT:
        with self._guard("read"):
            exists = self._query().filter(self.model.id == self.key).first() is not None
        if exists:
            return self.update(self.key, entity)
        return self.create(entity)
