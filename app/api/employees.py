# Employee endpoints (persisted, rate limited)
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.core.rate_limit import check_rate_limit
from app.models.schemas import DeletedResponse, EmployeeCreate, EmployeeOut, EmployeeUpdate
from app.models.user import Role
from app.services import employee_service

# Every route here counts against the client's rate-limit windows
router = APIRouter(prefix="/employees", dependencies=[Depends(check_rate_limit)])


@router.get("", response_model=List[EmployeeOut])
def find_all(
    role: Optional[Role] = Query(None, description="Only return employees with this role"),
    db: Session = Depends(get_db),
):
    return employee_service.find_all(db, role)


@router.get("/{employee_id}", response_model=EmployeeOut)
def find_one(employee_id: int, db: Session = Depends(get_db)):
    return employee_service.find_one(db, employee_id)


@router.post("", response_model=EmployeeOut, status_code=status.HTTP_201_CREATED)
def create(employee: EmployeeCreate, db: Session = Depends(get_db)):
    """Create an employee. Duplicate emails are rejected with 409."""
    return employee_service.create(db, employee)


@router.patch("/{employee_id}", response_model=EmployeeOut)
def update(employee_id: int, employee_update: EmployeeUpdate, db: Session = Depends(get_db)):
    return employee_service.update(db, employee_id, employee_update)


@router.delete("/{employee_id}", response_model=DeletedResponse)
def delete(employee_id: int, db: Session = Depends(get_db)):
    return DeletedResponse(id=employee_service.delete(db, employee_id))
