# Pydantic schemas (request/response)
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.models.user import Role


class StaffCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    role: Role


class StaffUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    role: Optional[Role] = None

    def changes(self) -> dict:
        """Fields the client actually supplied, ignoring explicit nulls."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class UserCreate(StaffCreate):
    pass


class UserUpdate(StaffUpdate):
    pass


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: Role


class EmployeeCreate(StaffCreate):
    pass


class EmployeeUpdate(StaffUpdate):
    pass


class EmployeeOut(UserOut):
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")


class DeletedResponse(BaseModel):
    id: int
