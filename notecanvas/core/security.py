from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from notecanvas.core.config import settings

ALGORITHM = "HS256"

def _create_token(user_id: int, token_type: str, expire_min: int) -> str:
    payload = {
        "user_id": user_id,
        "exp": datetime.utcnow() + timedelta(minutes=expire_min),
        "type": token_type
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=ALGORITHM)

def create_access_token(user_id: int) -> str:
    return _create_token(user_id, "access", settings.JWT_EXPIRE_MIN)

def create_refresh_token(user_id: int) -> str:
    return _create_token(user_id, "refresh", settings.JWT_REFRESH_EXPIRE_MIN)

def verify_token(token: str) -> Optional[dict]:
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[ALGORITHM])
    except JWTError:
        return None

def decode_token(token: str) -> Optional[int]:
    # seuls les tokens d'accès ouvrent les routes protégées
    payload = verify_token(token)
    if payload is None or payload.get("type") != "access":
        return None
    return payload.get("user_id")
