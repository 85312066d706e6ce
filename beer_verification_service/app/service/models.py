# Pydantic models for the application-level verification view
import datetime
from pydantic import BaseModel, Field, field_validator


class VerificationResult(BaseModel):
    """A beer-eligibility decision as seen by the application (producer and consumer)."""
    name: str
    approved: bool
    beers_count: int = Field(ge=0, le=2**31 - 1) # int32 on the wire
    city: str
    date_of_birth: datetime.datetime

    model_config = {
        "frozen": True,
    }

    @field_validator('date_of_birth')
    @classmethod
    def date_of_birth_must_be_utc_seconds(cls, v: datetime.datetime) -> datetime.datetime:
        # The wire carries whole epoch seconds; naive values are read as UTC.
        if v.tzinfo is None:
            v = v.replace(tzinfo=datetime.timezone.utc)
        return v.astimezone(datetime.timezone.utc).replace(microsecond=0)


class VerificationRequest(BaseModel):
    age: int
