from datetime import date, time

from pydantic import BaseModel, Field

from app.application.use_cases.pricing import PriceBreakdown
from app.domain.entities.booking_draft import BookingDraft
from app.domain.entities.catalog import LessonType, TeoriLessonType, TeoriSession
from app.domain.entities.participants import ActingUser, GuestDetails, Role, Student, Supervisor


class ActingUserSchema(BaseModel):
    id: str
    role: Role
    first_name: str = ""
    last_name: str = ""
    email: str = ""

    def to_entity(self) -> ActingUser:
        return ActingUser(**self.model_dump())


class StartWizardRequestSchema(BaseModel):
    acting_user: ActingUserSchema | None = None


class LessonTypeRequestSchema(BaseModel):
    lesson_type_id: str


class SlotRequestSchema(BaseModel):
    selected_date: date
    selected_time: time


class TeoriSessionRequestSchema(BaseModel):
    session_id: str


class GearRequestSchema(BaseModel):
    transmission_type: str


class StudentRequestSchema(BaseModel):
    student_id: str


class GuestSchema(BaseModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    personal_number: str = ""

    def to_entity(self) -> GuestDetails:
        return GuestDetails(**self.model_dump())


class SupervisorSchema(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    personal_number: str = ""

    def to_entity(self) -> Supervisor:
        return Supervisor(**self.model_dump())


class SupervisorsRequestSchema(BaseModel):
    supervisors: list[SupervisorSchema] = Field(default_factory=list)


class TermsRequestSchema(BaseModel):
    accepted: bool


class WizardResponseSchema(BaseModel):
    wizard_id: str
    status: str
    step: str
    mode: str | None = None
    role: Role | None = None
    draft: BookingDraft
    price: PriceBreakdown | None = None
    terms_accepted: bool = False
    lesson_types: list[LessonType] = Field(default_factory=list)
    teori_lesson_types: list[TeoriLessonType] = Field(default_factory=list)
    bookable_sessions: list[TeoriSession] = Field(default_factory=list)
    errors: dict[str, str] = Field(default_factory=dict)
    notice: str | None = None
    booking_id: str | None = None
    redirect_url: str | None = None


class StudentListResponseSchema(BaseModel):
    students: list[Student]


class StudentResponseSchema(BaseModel):
    student: Student
