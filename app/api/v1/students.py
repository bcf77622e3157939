from fastapi import APIRouter, Depends, HTTPException

from app.api.v1.schemas import GuestSchema, StudentListResponseSchema, StudentResponseSchema
from app.application.exceptions import BookingRejectedError, FieldValidationError
from app.application.use_cases.student_lookup import StudentLookupUseCase
from app.wiring.dependencies import get_student_lookup_use_case

router = APIRouter()


@router.get("", response_model=StudentListResponseSchema)
def search_students(q: str | None = None, uc: StudentLookupUseCase = Depends(get_student_lookup_use_case)):
    return StudentListResponseSchema(students=uc.search(q))


@router.post("", response_model=StudentResponseSchema, status_code=201)
def create_student(req: GuestSchema, uc: StudentLookupUseCase = Depends(get_student_lookup_use_case)):
    try:
        student = uc.create(req.to_entity())
    except FieldValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors)
    except BookingRejectedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return StudentResponseSchema(student=student)
