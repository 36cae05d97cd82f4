from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from brewtable.core.config import settings
from brewtable.core.security import decode_token
from brewtable.db.session import get_db
from brewtable.models.manager import Manager

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/admin/auth/login")


def get_current_manager(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> Manager:
    manager_id = decode_token(token)
    if not manager_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    manager = db.get(Manager, int(manager_id))
    if not manager:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Manager not found")
    return manager


def ensure_can_manage(manager: Manager, location_id: int) -> None:
    """Raise 403 if the manager is restricted to other locations."""
    if not manager.can_manage(location_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not allowed to manage this location",
        )
