"""
Domain models for the contest ranker.

Defines the decoded submission `Record`, the per-query `RankedRecord`, and the
tagged per-row decode outcome (`ParsedRow` or `MalformedRow`) collected into a
`DecodeReport`.
"""
from __future__ import annotations

from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, Field

_FROZEN = {
    "frozen": True,
    "populate_by_name": True,
    "arbitrary_types_allowed": False,
}


class Record(BaseModel):
    """
    One decoded submission row.
    """

    sequence_index: int = Field(..., ge=0, description="Zero-based post-header row position.")
    timestamp: str = Field("", description="Raw DD/MM/YYYY HH:MM:SS submission time.")
    phone: str = Field("", description="Opaque submitter identifier.")
    choice: str = Field("", description="Free-text choice, matched case-insensitively.")
    prediction: int = Field(0, description="Predicted value with separators stripped.")
    is_valid: bool = Field(False, description="Whether the validity column read TRUE.")

    model_config = _FROZEN


class RankedRecord(Record):
    """
    A record paired with its absolute distance to the target.
    """

    distance: int = Field(..., ge=0, description="|prediction - target|.")

    @classmethod
    def from_record(cls, record: Record, target: int) -> "RankedRecord":
        return cls(**record.model_dump(), distance=abs(record.prediction - target))


class ParsedRow(BaseModel):
    kind: Literal["parsed"] = "parsed"
    record: Record

    model_config = _FROZEN


class MalformedRow(BaseModel):
    """
    Diagnostic for a row that did not split into enough fields.

    `line_number` is 1-based in the source text, counting the header.
    """

    kind: Literal["malformed"] = "malformed"
    sequence_index: int = Field(..., ge=0)
    line_number: int = Field(..., ge=2)
    raw: str
    field_count: int = Field(..., ge=0)

    model_config = _FROZEN


RowOutcome = Annotated[Union[ParsedRow, MalformedRow], Field(discriminator="kind")]


class DecodeReport(BaseModel):
    """
    Full result of decoding a feed: every per-row outcome in input order.
    """

    outcomes: List[RowOutcome] = Field(default_factory=list)

    model_config = _FROZEN

    @property
    def records(self) -> List[Record]:
        """All decoded records, valid or not."""
        return [o.record for o in self.outcomes if isinstance(o, ParsedRow)]

    @property
    def valid_records(self) -> List[Record]:
        return [r for r in self.records if r.is_valid]

    @property
    def malformed(self) -> List[MalformedRow]:
        return [o for o in self.outcomes if isinstance(o, MalformedRow)]

    @property
    def invalid_count(self) -> int:
        return sum(1 for r in self.records if not r.is_valid)

    @property
    def malformed_count(self) -> int:
        return len(self.malformed)


__all__ = [
    "DecodeReport",
    "MalformedRow",
    "ParsedRow",
    "RankedRecord",
    "Record",
    "RowOutcome",
]
