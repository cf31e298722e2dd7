from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase keys on the wire, snake_case attributes in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# Band numbers and row ids live in 32-bit integer columns
MAX_INT = 2**31 - 1
BandNo = Annotated[int, Field(ge=0, le=MAX_INT)]
RowId = Annotated[int, Field(ge=1, le=MAX_INT)]


class EntryCreate(CamelModel):
    """One submission: the same person, zone and community for many bands."""
    user_id: str = Field(min_length=1)
    bands: List[BandNo] = Field(min_length=1)
    name: str = Field(min_length=1)
    zone: str = Field(min_length=1)
    community: str = Field(min_length=1)
    amount_per_band: Optional[float] = None
    # Group id of a previous submission to replace
    entry_id: Optional[str] = None

    @field_validator('amount_per_band')
    @classmethod
    def amount_must_be_positive(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v < 0:
            raise ValueError('Amount must be non-negative')
        return v


class EntryUpdate(CamelModel):
    id: RowId
    new_band_no: Optional[BandNo] = None
    name: Optional[str] = Field(None, min_length=1)
    zone: Optional[str] = Field(None, min_length=1)
    community: Optional[str] = Field(None, min_length=1)
    amount: Optional[float] = None

    @field_validator('amount')
    @classmethod
    def amount_must_be_positive(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v < 0:
            raise ValueError('Amount must be non-negative')
        return v


class Entry(CamelModel):
    id: str
    band_no: int
    name: str
    zone: str
    community: str
    amount: float
    user_id: str
    entry_group_id: Optional[str] = None
    edited: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator('id', mode='before')
    @classmethod
    def id_as_string(cls, v) -> str:
        return str(v)


class EntryList(CamelModel):
    success: bool = True
    data: List[Entry]
    count: int
