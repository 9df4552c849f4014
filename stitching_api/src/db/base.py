from __future__ import annotations

import math
from datetime import date, datetime, timezone
from typing import Annotated, Any, ClassVar, List

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, model_validator


def utcnow() -> datetime:
    """Current time as a naive UTC datetime (the storage convention)."""
    return datetime.now(tz=timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Convert aware datetimes to naive UTC; naive values are kept as-is."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


# Datetime column normalised to naive UTC on the way in.
Timestamp = Annotated[datetime, AfterValidator(to_naive_utc)]


class Base(BaseModel):
    """
    Base class for records persisted as rows of a workbook.

    Each subclass maps to one `.xlsx` file (`__tablename__` + ".xlsx") whose header
    row is the list of model fields. Cell values coming back from a workbook are
    loosely typed (NaN for blanks, numbers in text columns, pandas Timestamps),
    so the validator below normalises them before field validation.
    """

    __tablename__: ClassVar[str]
    __sheet_name__: ClassVar[str] = "Sheet1"

    model_config = ConfigDict(from_attributes=True, coerce_numbers_to_str=True)

    @model_validator(mode="before")
    @classmethod
    def _clean_cells(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        cleaned = {}
        for key, value in data.items():
            if isinstance(value, float) and math.isnan(value):
                continue
            if value is None or (isinstance(value, str) and not value.strip()):
                # blanks fall back to field defaults
                continue
            if hasattr(value, "to_pydatetime"):
                value = value.to_pydatetime()
            cleaned[key] = value
        return cleaned

    @classmethod
    def columns(cls) -> List[str]:
        """Ordered header row for this table."""
        return list(cls.model_fields.keys())

    def to_row(self) -> dict:
        """Serialise the record into workbook cell values."""
        row = {}
        for key, value in self.model_dump().items():
            if isinstance(value, (datetime, date)):
                value = value.isoformat()
            row[key] = value
        return row


class IntPkMixin(BaseModel):
    """Mixin providing the numeric auto-increment primary key."""
    id: int = Field(..., ge=1, description="Record identifier")
