"""Renewal alerts: find contracts renewing exactly N days out"""

import logging
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from contract_manager.db.base import ContractStore, StoreError
from contract_manager.models.stats import AlertRun, RenewalAlert
from contract_manager.utils.config import get_settings
from contract_manager.utils.dates import parse_date

logger = logging.getLogger(__name__)


def find_renewal_alerts(
    store: ContractStore,
    today: date,
    windows: Iterable[int],
    now: Optional[datetime] = None,
) -> AlertRun:
    """Collect one alert per contract whose renewal is exactly `window` days away.

    Matching on the exact day means a daily run alerts each contract once
    per window. A failing window is recorded and the others still run.
    """
    alerts = []
    errors = []
    for days in windows:
        target = today + timedelta(days=days)
        try:
            rows = store.contracts_renewing_on(target)
        except StoreError as e:
            logger.error(f"Error fetching contracts for {days} day alert: {e}")
            errors.append(f"DB Error ({days}d): {e}")
            continue

        if not rows:
            logger.info(f"No contracts renewing in {days} days ({target})")
            continue

        logger.info(f"Found {len(rows)} contracts renewing in {days} days")
        for row in rows:
            alerts.append(RenewalAlert(
                contract_id=str(row["id"]),
                file_name=row.get("file_name") or "",
                renewal_date=parse_date(row.get("renewal_date")) or target,
                days_until_renewal=days,
                user_id=row.get("user_id"),
            ))
    return AlertRun(alerts=alerts, errors=errors, timestamp=now or datetime.now())


class AlertService:
    """Runs the renewal alert check against the configured store."""

    def __init__(self, store: Optional[ContractStore] = None):
        self.settings = get_settings()
        self._store = store

    @property
    def store(self) -> ContractStore:
        """Lazy-load store client."""
        if self._store is None:
            from contract_manager.db.supabase import get_store
            self._store = get_store()
        return self._store

    def run(self, today: Optional[date] = None) -> AlertRun:
        result = find_renewal_alerts(
            self.store,
            today or date.today(),
            self.settings.alert_windows,
        )
        for alert in result.alerts:
            logger.info(
                f"Renewal alert: {alert.file_name} renews {alert.renewal_date} "
                f"({alert.days_until_renewal} days) for user {alert.user_id}"
            )
        return result
