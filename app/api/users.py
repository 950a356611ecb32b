# User endpoints (in-memory store)
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_user_store
from app.models.schemas import DeletedResponse, UserCreate, UserOut, UserUpdate
from app.models.user import Role
from app.services.user_store import UserStore

router = APIRouter(prefix="/users")


@router.get("", response_model=List[UserOut])
def find_all(
    role: Optional[Role] = Query(None, description="Only return users with this role"),
    store: UserStore = Depends(get_user_store),
):
    return store.find_all(role)


@router.get("/{user_id}", response_model=UserOut)
def find_one(user_id: int, store: UserStore = Depends(get_user_store)):
    return store.find_one(user_id)


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create(user: UserCreate, store: UserStore = Depends(get_user_store)):
    return store.create(name=user.name, email=user.email, role=user.role)


@router.patch("/{user_id}", response_model=UserOut)
def update(user_id: int, user_update: UserUpdate, store: UserStore = Depends(get_user_store)):
    return store.update(user_id, **user_update.changes())


@router.delete("/{user_id}", response_model=DeletedResponse)
def delete(user_id: int, store: UserStore = Depends(get_user_store)):
    removed = store.delete(user_id)
    return DeletedResponse(id=removed.id)
