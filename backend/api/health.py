"""GET /health — liveness probe."""
from fastapi import APIRouter

router = APIRouter()

SERVICE_NAME = "autocrud"


@router.get("/health")
def health_check():
    return {"status": "ok", "service": SERVICE_NAME}
