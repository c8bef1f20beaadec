"""Contract document models"""

from datetime import date, datetime
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class Severity(str, Enum):
    """Severity of a flagged clause"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TextValue(BaseModel):
    """Extracted value returned as plain text"""
    kind: Literal["text"] = "text"
    value: str


class JsonValue(BaseModel):
    """Extracted value returned as a structured object"""
    kind: Literal["json"] = "json"
    value: Union[dict, list]


ExtractedValue = Annotated[Union[TextValue, JsonValue], Field(discriminator="kind")]


class AbusiveClause(BaseModel):
    """Clause flagged by the AI as abusive or risky"""
    reference: Optional[str] = None
    explanation: Optional[str] = None
    severity: Optional[Severity] = None


class ContractDocument(BaseModel):
    """An uploaded and analyzed contract"""
    id: str
    file_name: str
    file_path: Optional[str] = None
    contract_type: str = "General"
    sector: Optional[str] = None
    effective_date: Optional[date] = None
    renewal_date: Optional[date] = None
    notice_period_days: int = 30
    termination_clause_reference: Optional[str] = None
    summary: Optional[str] = None
    risk_score: Optional[float] = None
    risk_level: Optional[str] = None
    extracted_data: dict[str, ExtractedValue] = {}
    data_sources: dict[str, str] = {}
    abusive_clauses: List[AbusiveClause] = []
    alerts: List[str] = []
    tags: List[str] = []
    created_at: Optional[datetime] = None
    last_modified: Optional[datetime] = None
