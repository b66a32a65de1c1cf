# app/api/routes/review.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from app.core.errors import NotFoundError
from app.db.base import get_db
from app.db.models.professional import Professional
from app.db.models.review import Review
from app.schemas.review import ReviewCreate, ReviewResponse

router = APIRouter(prefix="/reviews", tags=["reviews"])


# Create review
@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
def create_review(review_in: ReviewCreate, db: Session = Depends(get_db)):
    professional = db.query(Professional).filter(Professional.id == review_in.professional_id).first()
    if not professional:
        raise NotFoundError(
            "Professional not found",
            details={"professional_id": review_in.professional_id},
        )

    review = Review(
        professional_id=professional.id,
        rating=review_in.rating,
        comment=review_in.comment,
    )

    db.add(review)
    db.commit()
    db.refresh(review)
    return review


# List reviews for a professional (public), newest first
@router.get("/professional/{professional_id}", response_model=List[ReviewResponse])
def list_professional_reviews(professional_id: int, db: Session = Depends(get_db)):
    reviews = (
        db.query(Review)
        .filter(Review.professional_id == professional_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .all()
    )
    return reviews
