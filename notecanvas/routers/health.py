from fastapi import APIRouter
from datetime import datetime

router = APIRouter()

@router.get("/z")
def healthz():
    # Check si l'API est up
    return {"status": "ok", "timestamp": datetime.utcnow().isoformat()}
