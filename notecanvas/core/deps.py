from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session
from typing import Optional
from notecanvas.core.database import get_db
from notecanvas.core.security import decode_token
from notecanvas.models.user import User

def get_current_user(db: Session = Depends(get_db), authorization: Optional[str] = Header(None)) -> User:
    """
    Récupère l'utilisateur depuis le JWT token.

    Partagée par tous les routers protégés: extrait le token du header
    Authorization, le valide, et retourne l'user.
    """
    if not authorization:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")

    token = authorization.replace("Bearer ", "")
    user_id = decode_token(token)
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    return user
