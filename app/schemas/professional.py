# app/schemas/professional.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from app.schemas.category import CategoryResponse


# Input: create a professional profile for an existing user
class ProfessionalCreate(BaseModel):
    user_id: int
    phone_number: str
    description: str
    categories: Optional[List[int]] = None
    notification_token: Optional[str] = None


# Input: partial update, unset fields are left alone
class ProfessionalUpdate(BaseModel):
    phone_number: Optional[str] = None
    description: Optional[str] = None
    notification_token: Optional[str] = None
    categories: Optional[List[int]] = None


# Professional joined with its user's public fields
class ProfessionalRead(BaseModel):
    id: int
    user_id: int
    name: str
    email: str
    is_active: bool

    phone_number: str
    description: str
    notification_token: Optional[str] = None

    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProfessionalRated(ProfessionalRead):
    average_rating: float = 0.0


class ProfessionalWithCategories(ProfessionalRead):
    password: str
    categories: List[CategoryResponse] = Field(default_factory=list)


# What create() hands back: raw category ids, not Category records
class ProfessionalCreated(ProfessionalRead):
    password: str
    categories: List[int] = Field(default_factory=list)
