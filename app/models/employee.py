# SQLAlchemy Employee model
from sqlalchemy import Column, DateTime, Enum as SQLEnum, Integer, String
from sqlalchemy.sql import func

from app.db.session import Base
from app.models.user import Role


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False)
    role = Column(SQLEnum(Role, name="role"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
