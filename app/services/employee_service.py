# Employee data access
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError
from app.models.employee import Employee
from app.models.schemas import EmployeeCreate, EmployeeUpdate
from app.models.user import Role

LOGGER = logging.getLogger(__name__)


def _commit(db: Session, employee: Employee) -> Employee:
    """Commit the pending write and reload server-side columns.

    Raises ConflictError if a storage constraint rejects the write.
    """
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        LOGGER.warning("Employee write rejected by storage: %s", exc.orig)
        raise ConflictError("Employee with this email already exists") from exc
    db.refresh(employee)
    return employee


def find_all(db: Session, role: Optional[Role] = None) -> List[Employee]:
    query = db.query(Employee)
    if role is not None:
        query = query.filter(Employee.role == role)
    return query.order_by(Employee.id).all()


def find_one(db: Session, employee_id: int) -> Employee:
    employee = db.get(Employee, employee_id)
    if employee is None:
        raise NotFoundError("Employee Not Found")
    return employee


def create(db: Session, data: EmployeeCreate) -> Employee:
    employee = Employee(**data.model_dump())
    db.add(employee)
    employee = _commit(db, employee)
    LOGGER.info("Created employee %s", employee.id)
    return employee


def update(db: Session, employee_id: int, data: EmployeeUpdate) -> Employee:
    employee = find_one(db, employee_id)
    changes = data.changes()
    for field, value in changes.items():
        setattr(employee, field, value)
    employee = _commit(db, employee)
    LOGGER.info("Updated employee %s fields=%s", employee_id, sorted(changes))
    return employee


def delete(db: Session, employee_id: int) -> int:
    """Delete one employee and return its id."""
    employee = find_one(db, employee_id)
    db.delete(employee)
    db.commit()
    LOGGER.info("Deleted employee %s", employee_id)
    return employee_id
