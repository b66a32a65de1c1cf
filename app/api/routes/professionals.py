# app/api/routes/professionals.py

from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.db.base import get_db
from app.repositories.professional import ProfessionalRepository
from app.schemas.professional import (
    ProfessionalCreate,
    ProfessionalCreated,
    ProfessionalRated,
    ProfessionalRead,
    ProfessionalUpdate,
    ProfessionalWithCategories,
)

router = APIRouter(prefix="/professionals", tags=["professionals"])

# password hashes never leave the API
PRIVATE_FIELDS = {"password"}


def get_professional_repository(db: Session = Depends(get_db)) -> ProfessionalRepository:
    return ProfessionalRepository(db)


def _not_found(professional_id: int) -> NotFoundError:
    return NotFoundError(
        f"Professional {professional_id} not found",
        details={"professional_id": professional_id},
    )


@router.post(
    "",
    response_model=ProfessionalCreated,
    response_model_exclude=PRIVATE_FIELDS,
    status_code=status.HTTP_201_CREATED,
)
def create_professional(
    professional_in: ProfessionalCreate,
    repo: ProfessionalRepository = Depends(get_professional_repository),
):
    return repo.create(professional_in)


@router.get("", response_model=List[ProfessionalRead])
def list_professionals(repo: ProfessionalRepository = Depends(get_professional_repository)):
    return repo.find_all()


# Declared before /{professional_id} so "ranking" is not parsed as an id
@router.get("/ranking", response_model=List[ProfessionalRated])
def list_professionals_by_rating(repo: ProfessionalRepository = Depends(get_professional_repository)):
    return repo.find_sorted_by_rating()


@router.get("/{professional_id}", response_model=ProfessionalRead)
def get_professional(
    professional_id: int,
    repo: ProfessionalRepository = Depends(get_professional_repository),
):
    professional = repo.find_one(professional_id)
    if professional is None:
        raise _not_found(professional_id)
    return professional


@router.get(
    "/{professional_id}/categories",
    response_model=ProfessionalWithCategories,
    response_model_exclude=PRIVATE_FIELDS,
)
def get_professional_with_categories(
    professional_id: int,
    repo: ProfessionalRepository = Depends(get_professional_repository),
):
    professional = repo.get_with_categories(professional_id)
    if professional is None:
        raise _not_found(professional_id)
    return professional


@router.put("/{professional_id}", response_model=ProfessionalWithCategories, response_model_exclude=PRIVATE_FIELDS)
def update_professional(
    professional_id: int,
    update_data: ProfessionalUpdate,
    repo: ProfessionalRepository = Depends(get_professional_repository),
):
    if not repo.update(professional_id, update_data):
        raise _not_found(professional_id)
    return repo.get_with_categories(professional_id)


@router.delete("/{professional_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_professional(
    professional_id: int,
    repo: ProfessionalRepository = Depends(get_professional_repository),
):
    if not repo.delete(professional_id):
        raise _not_found(professional_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
