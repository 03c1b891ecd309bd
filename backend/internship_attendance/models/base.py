"""Declarative base shared by the internship models."""
import enum
from datetime import date, datetime
from typing import Any, Dict
from internship_attendance import db

def _json_value(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, enum.Enum):
        return value.value
    return value

class BaseModel(db.Model):
    """Surrogate key, audit timestamps and JSON serialisation."""

    __abstract__ = True

    id = db.Column(db.Integer, primary_key=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def save(self) -> 'BaseModel':
        db.session.add(self)
        db.session.commit()
        return self

    def delete(self) -> None:
        db.session.delete(self)
        db.session.commit()

    def update(self, **values) -> 'BaseModel':
        """Assign mapped columns and commit; unknown keys raise."""
        columns = self.__table__.columns
        for key, value in values.items():
            if key not in columns:
                raise AttributeError(f'{self.__class__.__name__} has no column {key!r}')
            setattr(self, key, value)
        db.session.commit()
        return self

    def to_dict(self, exclude: list = None) -> Dict[str, Any]:
        """Column values keyed by name; dates as ISO strings, enums by value."""
        skipped = set(exclude or ())
        return {
            column.name: _json_value(getattr(self, column.name))
            for column in self.__table__.columns
            if column.name not in skipped
        }

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} {self.id}>'
