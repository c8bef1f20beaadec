"""Cron-triggered renewal alert endpoint"""

import logging
from typing import Optional

from fastapi import APIRouter, Header, HTTPException

from contract_manager.models import AlertRun
from contract_manager.services.alerts import AlertService
from contract_manager.utils.config import get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


def _check_secret(authorization: Optional[str]) -> None:
    secret = get_settings().cron_secret
    if not secret:
        raise HTTPException(status_code=500, detail="CRON_SECRET is not configured")
    if authorization != f"Bearer {secret}":
        raise HTTPException(status_code=401, detail="Unauthorized")


@router.get("/api/cron/renewal-alerts", response_model=AlertRun)
@router.post("/api/cron/renewal-alerts", response_model=AlertRun)
async def renewal_alerts(authorization: Optional[str] = Header(None)):
    """Run the daily renewal alert check. Called by the platform scheduler."""
    _check_secret(authorization)
    result = AlertService().run()
    logger.info(f"Cron renewal check: {len(result.alerts)} alerts, {len(result.errors)} errors")
    return result
