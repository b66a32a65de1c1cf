# app/db/models/professional.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table

from app.db.base import Base

# association rows are owned by the professional side
professionals_categories = Table(
    "professionals_categories",
    Base.metadata,
    Column("professional_id", Integer, ForeignKey("professionals.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", Integer, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)


class Professional(Base):
    __tablename__ = "professionals"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    phone_number = Column(String, nullable=False)
    description = Column(String, nullable=False)
    notification_token = Column(String, nullable=True)

    # set explicitly by the repository
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)
