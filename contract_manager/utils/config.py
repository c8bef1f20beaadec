"""Configuration management using pydantic-settings"""

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Database mode: 'supabase' or 'sqlite'
    db_mode: str = Field(default="sqlite", description="Database backend: 'supabase' or 'sqlite'")
    database_path: str = Field(default="./data/contracts.db", description="Path to SQLite database")
    log_level: str = Field(default="INFO", description="Logging level")

    # Supabase settings
    supabase_url: Optional[str] = Field(default=None, description="Supabase project URL")
    supabase_key: Optional[str] = Field(default=None, description="Supabase anon key")
    supabase_service_key: Optional[str] = Field(default=None, description="Supabase service role key")
    storage_bucket: str = Field(default="contracts", description="Storage bucket holding uploaded files")

    # Calendar settings
    org_domain: str = Field(default="ysnsolutions.com", description="Domain used in iCalendar UIDs")
    language: str = Field(default="es", description="UI language: 'es' or 'en'")
    event_urgent_days: int = Field(default=7, description="Events within this many days are urgent")
    event_upcoming_days: int = Field(default=30, description="Events within this many days are upcoming")

    # Renewal alerts
    alert_windows: List[int] = Field(default=[7, 14, 30, 60], description="Days before renewal to alert")
    alert_time: str = Field(default="08:00", description="Daily alert check time (HH:MM)")
    cron_secret: Optional[str] = Field(default=None, description="Bearer secret for the cron endpoint")
    enable_worker: bool = Field(default=False, description="Run the alert scheduler inside the API process")

    # Drafts
    drafts_path: str = Field(default="./data/drafts", description="Directory for saved edit drafts")
    draft_ttl_hours: int = Field(default=24, description="Drafts older than this are discarded")

    # Tables
    page_size: int = Field(default=10, description="Rows per page in contract tables")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


def get_settings() -> Settings:
    """Get application settings"""
    return Settings()
