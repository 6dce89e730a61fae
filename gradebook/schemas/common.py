from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class DeleteResult(BaseModel):
    success: bool = True
    message: Optional[str] = None


class HealthStatus(BaseModel):
    status: str
    database: str
    timestamp: datetime
