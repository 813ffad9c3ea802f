from datetime import datetime
from typing import Any, Dict, List, Optional

from app.db.models.enums import ValidityStatus, ConfidenceLevel
from .base import CamelModel


class FactCheckResponse(CamelModel):
    id: int
    post_id: int
    content_analyzed: str
    accuracy_score: float
    validity_status: ValidityStatus
    confidence_level: ConfidenceLevel
    analysis: Optional[str] = None
    sources: List[str] = []
    corrections: List[str] = []
    reasoning: Optional[str] = None
    claims: List[Dict[str, Any]] = []
    checked_by: str
    checked_at: datetime


class FactCheckStatus(CamelModel):
    has_fact_check: bool
    last_checked: Optional[datetime] = None
    validity_status: str = "NOT_CHECKED"
    accuracy_score: Optional[float] = None
    confidence_level: Optional[ConfidenceLevel] = None
