from fastapi import APIRouter
from pydantic import BaseModel

from db.session import check_db_connection

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    status: str
    services: dict


@router.get("/health", response_model=HealthResponse)
def health_check():
    """Report whether the database is reachable."""
    services = {"database": check_db_connection()}
    overall_status = "healthy" if all(services.values()) else "degraded"
    return HealthResponse(status=overall_status, services=services)
