from datetime import datetime, timezone

from fastapi import APIRouter

from taskmanager.core import responses
from taskmanager.core.messages import ApiMessages

router = APIRouter()

@router.get("/api/health")
def health():
    # Check si l'API est up
    return responses.success(ApiMessages.HEALTHY, {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat()
    })
