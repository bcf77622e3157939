from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class SupervisorPayload(_Payload):
    name: str
    email: str = ""
    phone: str = ""
    personal_number: str = Field(default="", alias="personalNumber")


class GuestPayload(_Payload):
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: str
    phone: str
    personal_number: str = Field(alias="personalNumber")


class LessonBookingPayload(_Payload):
    kind: Literal["lesson"] = "lesson"
    lesson_type_id: str = Field(alias="lessonTypeId")
    scheduled_date: dt.date = Field(alias="scheduledDate")
    start_time: dt.time = Field(alias="startTime")
    end_time: dt.time = Field(alias="endTime")
    duration_minutes: int = Field(alias="durationMinutes", gt=0)
    transmission_type: Literal["manual", "automatic"] = Field(alias="transmissionType")


class TeoriBookingPayload(_Payload):
    kind: Literal["teori"] = "teori"
    teori_lesson_type_id: str = Field(alias="teoriLessonTypeId")
    session_id: str = Field(alias="sessionId")
    supervisors: list[SupervisorPayload] = Field(default_factory=list)


class BookingPayload(_Payload):
    """What the booking backend receives when a draft is confirmed."""

    booking: Annotated[Union[LessonBookingPayload, TeoriBookingPayload], Field(discriminator="kind")]
    user_id: str | None = Field(default=None, alias="userId")
    guest: GuestPayload | None = None
    payment_method: str = Field(alias="paymentMethod")
    total_price: Decimal = Field(alias="totalPrice", ge=0)

    @model_validator(mode="after")
    def _one_identity(self) -> "BookingPayload":
        if bool(self.user_id) == bool(self.guest):
            raise ValueError("Exactly one of userId or guest must be set")
        return self
