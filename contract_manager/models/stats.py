"""Aggregate statistics models"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel


class Stats(BaseModel):
    """Urgency buckets and event counts for the calendar view"""
    urgent: int = 0
    upcoming: int = 0
    active: int = 0
    expired: int = 0
    total: int = 0
    total_events: int = 0
    event_type_counts: dict[str, int] = {}


class SectorCount(BaseModel):
    """Number of contracts in a sector"""
    sector: str
    count: int


class DashboardStats(BaseModel):
    """Portfolio overview for the dashboard"""
    total: int = 0
    high_risk: int = 0
    medium_risk: int = 0
    expiring_soon: int = 0
    top_sectors: List[SectorCount] = []


class RenewalAlert(BaseModel):
    """A contract whose renewal falls exactly on an alert window"""
    contract_id: str
    file_name: str
    renewal_date: date
    days_until_renewal: int
    user_id: Optional[str] = None


class AlertRun(BaseModel):
    """Result of one renewal alert check"""
    alerts: List[RenewalAlert] = []
    errors: List[str] = []
    timestamp: datetime
