from datetime import datetime, timezone
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from gradebook.core.database import check_database_connection
from gradebook.schemas.common import HealthStatus

router = APIRouter()


@router.get("/health", response_model=HealthStatus)
def health_check():
    """
    Liveness and database reachability
    """
    timestamp = datetime.now(timezone.utc).isoformat()
    if not check_database_connection():
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"status": "ERROR", "database": "disconnected", "timestamp": timestamp},
        )
    return {"status": "OK", "database": "connected", "timestamp": timestamp}
