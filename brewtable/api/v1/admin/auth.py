from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from brewtable.api.deps import get_current_manager
from brewtable.core.security import create_access_token, verify_password
from brewtable.db.session import get_db
from brewtable.models.manager import Manager
from brewtable.schemas.auth import ManagerLogin, Manager as ManagerSchema, Token

router = APIRouter(prefix="/admin/auth", tags=["Admin - Auth"])


@router.post("/login", response_model=Token)
def login(data: ManagerLogin, db: Session = Depends(get_db)):
    """Exchange manager email + password for a bearer token."""
    manager = db.query(Manager).filter(Manager.email == data.email).first()
    if not manager or not verify_password(data.password, manager.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )
    return Token(
        access_token=create_access_token(manager.id),
        manager=ManagerSchema.model_validate(manager),
    )


@router.get("/me", response_model=ManagerSchema)
def read_me(current_manager: Manager = Depends(get_current_manager)):
    return current_manager
