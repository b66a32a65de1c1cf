# app/repositories/professional.py
"""
Persistence for professionals and their category associations.

Reads signal "not found" with None; update/delete signal it with False.
Store errors are not reinterpreted: the session is rolled back and the
SQLAlchemy exception propagates to the caller.
"""
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy import delete, func, insert
from sqlalchemy.orm import Session

from app.core import errors
from app.db.models.category import Category
from app.db.models.professional import Professional, professionals_categories
from app.db.models.review import Review
from app.db.models.user import User
from app.schemas.category import CategoryResponse
from app.schemas.professional import (
    ProfessionalCreate,
    ProfessionalCreated,
    ProfessionalRated,
    ProfessionalRead,
    ProfessionalUpdate,
    ProfessionalWithCategories,
)

logger = logging.getLogger(__name__)

REQUIRED_CREATE_FIELDS = ("user_id", "phone_number", "description")
REQUIRED_UPDATE_FIELDS = ("phone_number", "description")
UPDATABLE_FIELDS = ("phone_number", "description", "notification_token")


class RatingIndex(dict):
    """Professional id -> average rating. Unrated professionals read as 0.0."""

    def __missing__(self, key):
        return 0.0

    @classmethod
    def from_rows(cls, rows):
        return cls((professional_id, float(avg)) for professional_id, avg in rows if avg is not None)


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _unique(ids: Iterable[int]) -> List[int]:
    return list(dict.fromkeys(ids))


class ProfessionalRepository:
    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _transaction(self):
        try:
            yield
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def _joined(self, *extra_columns):
        # professional + owning user's public fields
        return (
            self.db.query(
                Professional.id,
                Professional.user_id,
                User.name,
                User.email,
                User.is_active,
                Professional.phone_number,
                Professional.description,
                Professional.notification_token,
                Professional.created_at,
                Professional.updated_at,
                *extra_columns,
            )
            .join(User, User.id == Professional.user_id)
        )

    def _check_categories(self, category_ids: List[int]) -> None:
        if not category_ids:
            return
        found = {
            category_id
            for (category_id,) in self.db.query(Category.id).filter(Category.id.in_(category_ids))
        }
        missing = [category_id for category_id in category_ids if category_id not in found]
        if missing:
            raise errors.ReferentialError(
                "Unknown category ids",
                details={"category_ids": missing},
            )

    def _insert_categories(self, professional_id: int, category_ids: List[int]) -> None:
        if not category_ids:
            return
        self.db.execute(
            insert(professionals_categories),
            [{"professional_id": professional_id, "category_id": category_id} for category_id in category_ids],
        )

    def _delete_categories(self, professional_id: int) -> None:
        self.db.execute(
            delete(professionals_categories).where(
                professionals_categories.c.professional_id == professional_id
            )
        )

    def create(self, data: ProfessionalCreate) -> ProfessionalCreated:
        missing = [field for field in REQUIRED_CREATE_FIELDS if _is_blank(getattr(data, field, None))]
        if missing:
            raise errors.ValidationError("Missing required fields", details={"fields": missing})

        user = (
            self.db.query(User.name, User.email, User.password, User.is_active)
            .filter(User.id == data.user_id)
            .first()
        )
        if user is None:
            raise errors.ReferentialError(
                f"User {data.user_id} does not exist",
                details={"user_id": data.user_id},
            )

        category_ids = _unique(data.categories or [])
        now = datetime.utcnow()
        professional = Professional(
            user_id=data.user_id,
            phone_number=data.phone_number,
            description=data.description,
            notification_token=data.notification_token,
            created_at=now,
            updated_at=now,
        )

        with self._transaction():
            self._check_categories(category_ids)
            self.db.add(professional)
            self.db.flush()
            professional_id = professional.id
            self._insert_categories(professional_id, category_ids)

        logger.info("Created professional %s with %d categories", professional_id, len(category_ids))

        return ProfessionalCreated(
            id=professional_id,
            user_id=data.user_id,
            name=user.name,
            email=user.email,
            password=user.password,
            is_active=user.is_active,
            phone_number=data.phone_number,
            description=data.description,
            notification_token=data.notification_token,
            created_at=now,
            updated_at=now,
            categories=list(data.categories or []),
        )

    def get_with_categories(self, professional_id: int) -> Optional[ProfessionalWithCategories]:
        row = self._joined(User.password).filter(Professional.id == professional_id).first()
        if row is None:
            return None

        categories = (
            self.db.query(Category)
            .join(professionals_categories, Category.id == professionals_categories.c.category_id)
            .filter(professionals_categories.c.professional_id == professional_id)
            .order_by(Category.id)
            .all()
        )

        return ProfessionalWithCategories(
            **row._mapping,
            categories=[CategoryResponse.model_validate(category) for category in categories],
        )

    def find_all(self) -> List[ProfessionalRead]:
        rows = self._joined().order_by(Professional.id).all()
        return [ProfessionalRead(**row._mapping) for row in rows]

    def find_one(self, professional_id: int) -> Optional[ProfessionalRead]:
        row = self._joined().filter(Professional.id == professional_id).first()
        return ProfessionalRead(**row._mapping) if row is not None else None

    def update(self, professional_id: int, data: ProfessionalUpdate) -> bool:
        """
        Apply the supplied scalar fields and, when `categories` is supplied,
        replace the association set. An omitted `categories` keeps the current
        associations; an empty list clears them. An explicit None clears
        `notification_token`; blank required fields raise ValidationError.
        Scalar update and replace share one transaction.
        """
        changes = data.model_dump(exclude_unset=True)
        categories = changes.pop("categories", None)
        blank = [field for field in REQUIRED_UPDATE_FIELDS if field in changes and _is_blank(changes[field])]
        if blank:
            raise errors.ValidationError("Required fields cannot be blank", details={"fields": blank})
        values = {field: value for field, value in changes.items() if field in UPDATABLE_FIELDS}
        values["updated_at"] = datetime.utcnow()

        with self._transaction():
            updated_rows = (
                self.db.query(Professional)
                .filter(Professional.id == professional_id)
                .update(values, synchronize_session=False)
            )
            if updated_rows == 0:
                logger.debug("Update skipped, professional %s not found", professional_id)
                return False

            if categories is not None:
                category_ids = _unique(categories)
                self._check_categories(category_ids)
                self._delete_categories(professional_id)
                self._insert_categories(professional_id, category_ids)

        logger.info(
            "Updated professional %s (fields=%s, categories=%s)",
            professional_id,
            sorted(values),
            "kept" if categories is None else len(categories),
        )
        return True

    def delete(self, professional_id: int) -> bool:
        with self._transaction():
            deleted_rows = (
                self.db.query(Professional)
                .filter(Professional.id == professional_id)
                .delete(synchronize_session=False)
            )
            if deleted_rows == 0:
                logger.debug("Delete skipped, professional %s not found", professional_id)
                return False
            self._delete_categories(professional_id)

        logger.info("Deleted professional %s", professional_id)
        return True

    def find_sorted_by_rating(self) -> List[ProfessionalRated]:
        professionals = self._joined().order_by(Professional.id).all()
        averages = (
            self.db.query(Review.professional_id, func.avg(Review.rating))
            .group_by(Review.professional_id)
            .all()
        )
        ratings = RatingIndex.from_rows(averages)

        # sorted() is stable with reverse=True, so ties keep find_all order
        ranked = sorted(professionals, key=lambda row: ratings[row.id], reverse=True)
        return [ProfessionalRated(**row._mapping, average_rating=ratings[row.id]) for row in ranked]
