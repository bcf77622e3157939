from fastapi import APIRouter, Depends, HTTPException, Response

from app.api.v1.schemas import (
    GearRequestSchema,
    GuestSchema,
    LessonTypeRequestSchema,
    SlotRequestSchema,
    StartWizardRequestSchema,
    StudentRequestSchema,
    SupervisorsRequestSchema,
    TeoriSessionRequestSchema,
    TermsRequestSchema,
    WizardResponseSchema,
)
from app.application.exceptions import DraftNotFoundError
from app.application.use_cases.booking_wizard import BookingWizardUseCase, WizardResult
from app.application.use_cases.catalog_loader import bookable_sessions
from app.domain.entities.wizard_step import WizardStep
from app.wiring.dependencies import get_booking_wizard_use_case

router = APIRouter()

STATUS_CODES = {
    "ok": 200,
    "invalid": 422,
    "capacity_exceeded": 409,
    "disabled": 400,
    "rejected": 502,
    "confirmed": 201,
}


def _respond(result: WizardResult, response: Response) -> WizardResponseSchema:
    response.status_code = STATUS_CODES.get(result.status, 200)
    session = result.session
    teori_type = session.draft.teori_lesson_type
    sessions = (
        bookable_sessions(teori_type)
        if teori_type is not None and session.step is WizardStep.teori_sessions
        else []
    )
    return WizardResponseSchema(
        wizard_id=session.id,
        status=result.status,
        step=session.step.value,
        mode=session.draft.mode,
        role=session.role,
        draft=session.draft,
        price=result.price,
        terms_accepted=session.terms_accepted,
        lesson_types=list(session.lesson_types),
        teori_lesson_types=list(session.teori_lesson_types),
        bookable_sessions=sessions,
        errors=result.errors,
        notice=result.notice,
        booking_id=session.booking_id,
        redirect_url=result.redirect_url,
    )


def _run(action, *args) -> WizardResult:
    try:
        return action(*args)
    except DraftNotFoundError:
        raise HTTPException(status_code=404, detail="Booking draft not found or expired")


@router.post("", response_model=WizardResponseSchema, status_code=201)
def start_wizard(
    req: StartWizardRequestSchema,
    response: Response,
    uc: BookingWizardUseCase = Depends(get_booking_wizard_use_case),
):
    acting_user = req.acting_user.to_entity() if req.acting_user else None
    started = uc.start(acting_user)
    # A fresh wizard comes with the catalog already loaded
    result = uc.load_catalog(started.session.id)
    schema = _respond(result, response)
    response.status_code = 201
    return schema


@router.get("/{wizard_id}", response_model=WizardResponseSchema)
def get_wizard(wizard_id: str, response: Response, uc: BookingWizardUseCase = Depends(get_booking_wizard_use_case)):
    return _respond(_run(uc.view, wizard_id), response)


@router.post("/{wizard_id}/catalog", response_model=WizardResponseSchema)
def reload_catalog(wizard_id: str, response: Response, uc: BookingWizardUseCase = Depends(get_booking_wizard_use_case)):
    return _respond(_run(uc.load_catalog, wizard_id), response)


@router.post("/{wizard_id}/lesson-type", response_model=WizardResponseSchema)
def choose_lesson_type(
    wizard_id: str,
    req: LessonTypeRequestSchema,
    response: Response,
    uc: BookingWizardUseCase = Depends(get_booking_wizard_use_case),
):
    return _respond(_run(uc.choose_lesson_type, wizard_id, req.lesson_type_id), response)


@router.post("/{wizard_id}/teori-lesson-type", response_model=WizardResponseSchema)
def choose_teori_lesson_type(
    wizard_id: str,
    req: LessonTypeRequestSchema,
    response: Response,
    uc: BookingWizardUseCase = Depends(get_booking_wizard_use_case),
):
    return _respond(_run(uc.choose_teori_lesson_type, wizard_id, req.lesson_type_id), response)


@router.post("/{wizard_id}/slot", response_model=WizardResponseSchema)
def choose_slot(
    wizard_id: str,
    req: SlotRequestSchema,
    response: Response,
    uc: BookingWizardUseCase = Depends(get_booking_wizard_use_case),
):
    return _respond(_run(uc.choose_slot, wizard_id, req.selected_date, req.selected_time), response)


@router.post("/{wizard_id}/teori-session", response_model=WizardResponseSchema)
def choose_teori_session(
    wizard_id: str,
    req: TeoriSessionRequestSchema,
    response: Response,
    uc: BookingWizardUseCase = Depends(get_booking_wizard_use_case),
):
    return _respond(_run(uc.choose_teori_session, wizard_id, req.session_id), response)


@router.post("/{wizard_id}/gear", response_model=WizardResponseSchema)
def choose_gear(
    wizard_id: str,
    req: GearRequestSchema,
    response: Response,
    uc: BookingWizardUseCase = Depends(get_booking_wizard_use_case),
):
    return _respond(_run(uc.choose_gear, wizard_id, req.transmission_type), response)


@router.post("/{wizard_id}/student", response_model=WizardResponseSchema)
def choose_student(
    wizard_id: str,
    req: StudentRequestSchema,
    response: Response,
    uc: BookingWizardUseCase = Depends(get_booking_wizard_use_case),
):
    return _respond(_run(uc.choose_student, wizard_id, req.student_id), response)


@router.post("/{wizard_id}/guest", response_model=WizardResponseSchema)
def register_guest(
    wizard_id: str,
    req: GuestSchema,
    response: Response,
    uc: BookingWizardUseCase = Depends(get_booking_wizard_use_case),
):
    return _respond(_run(uc.register_guest, wizard_id, req.to_entity()), response)


@router.post("/{wizard_id}/supervisors", response_model=WizardResponseSchema)
def submit_supervisors(
    wizard_id: str,
    req: SupervisorsRequestSchema,
    response: Response,
    uc: BookingWizardUseCase = Depends(get_booking_wizard_use_case),
):
    supervisors = [s.to_entity() for s in req.supervisors]
    return _respond(_run(uc.submit_supervisors, wizard_id, supervisors), response)


@router.post("/{wizard_id}/back", response_model=WizardResponseSchema)
def go_back(wizard_id: str, response: Response, uc: BookingWizardUseCase = Depends(get_booking_wizard_use_case)):
    return _respond(_run(uc.go_back, wizard_id), response)


@router.post("/{wizard_id}/terms", response_model=WizardResponseSchema)
def accept_terms(
    wizard_id: str,
    req: TermsRequestSchema,
    response: Response,
    uc: BookingWizardUseCase = Depends(get_booking_wizard_use_case),
):
    return _respond(_run(uc.accept_terms, wizard_id, req.accepted), response)


@router.post("/{wizard_id}/confirm", response_model=WizardResponseSchema)
def confirm(wizard_id: str, response: Response, uc: BookingWizardUseCase = Depends(get_booking_wizard_use_case)):
    return _respond(_run(uc.confirm, wizard_id), response)
