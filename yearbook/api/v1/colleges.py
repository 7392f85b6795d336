"""College CRUD (admin only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from yearbook.api.deps import get_current_admin
from yearbook.core.database import get_db
from yearbook.schemas.auth import AdminPrincipal, MessageResponse
from yearbook.schemas.college import CollegeCreateRequest, CollegeOut, CollegeUpdateRequest
from yearbook.services import colleges as college_service

router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.post("/", response_model=CollegeOut, status_code=status.HTTP_201_CREATED)
def create_college(
    body: CollegeCreateRequest,
    admin: Annotated[AdminPrincipal, Depends(get_current_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> CollegeOut:
    college = college_service.create_college(
        db,
        name=body.name,
        code=body.code,
        degrees=body.degrees,
        created_by_id=admin.id,
    )
    return CollegeOut.model_validate(college)


@router.get("/", response_model=list[CollegeOut])
def list_colleges(db: Annotated[Session, Depends(get_db)]) -> list[CollegeOut]:
    return [CollegeOut.model_validate(c) for c in college_service.list_colleges(db)]


@router.get("/{college_id}", response_model=CollegeOut)
def get_college(college_id: int, db: Annotated[Session, Depends(get_db)]) -> CollegeOut:
    return CollegeOut.model_validate(college_service.get_college(db, college_id))


@router.patch("/{college_id}", response_model=CollegeOut)
def update_college(
    college_id: int,
    body: CollegeUpdateRequest,
    db: Annotated[Session, Depends(get_db)],
) -> CollegeOut:
    college = college_service.update_college(
        db, college_id, name=body.name, code=body.code, degrees=body.degrees
    )
    return CollegeOut.model_validate(college)


@router.delete("/{college_id}", response_model=MessageResponse)
def delete_college(college_id: int, db: Annotated[Session, Depends(get_db)]) -> MessageResponse:
    college_service.delete_college(db, college_id)
    return MessageResponse(message="College deleted successfully")
