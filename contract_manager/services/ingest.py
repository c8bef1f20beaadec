"""Ingestion: turn stored records into typed models, once.

Records arrive either straight from the database (snake_case columns) or
from the app API (camelCase). Extracted values are resolved into the
TextValue/JsonValue union here so nothing downstream has to sniff types.
"""

import json
import logging
import re
from datetime import datetime
from typing import Any, Optional

from contract_manager.models.contract import (
    AbusiveClause,
    ContractDocument,
    ExtractedValue,
    JsonValue,
    TextValue,
)
from contract_manager.models.event import CustomTask, EventCategory
from contract_manager.models.team import MemberRole, MemberStatus, TeamMember
from contract_manager.utils.dates import parse_date, parse_datetime

logger = logging.getLogger(__name__)

NOT_FOUND_VALUES = {"not specified", "no especificado"}

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

DEFAULT_NOTICE_PERIOD_DAYS = 30


def _pick(record: dict, snake: str, camel: str, default: Any = None) -> Any:
    """Read a field that may be stored in snake_case or camelCase"""
    value = record.get(camel)
    if value is None:
        value = record.get(snake)
    return default if value is None else value


def resolve_value(raw: Any) -> Optional[ExtractedValue]:
    """Resolve a raw extracted value into the tagged union.

    Strings that hold a JSON object or array become JsonValue; other
    strings and scalars become TextValue. None yields None.
    """
    if raw is None:
        return None
    if isinstance(raw, (dict, list)):
        return JsonValue(value=raw)
    if isinstance(raw, str):
        stripped = raw.strip()
        if stripped[:1] in ("{", "["):
            try:
                parsed = json.loads(stripped)
            except json.JSONDecodeError:
                return TextValue(value=raw)
            if isinstance(parsed, (dict, list)):
                return JsonValue(value=parsed)
        return TextValue(value=raw)
    return TextValue(value=str(raw))


def is_value_found(value: Optional[ExtractedValue]) -> bool:
    """False for absent values and for 'not specified' in either language"""
    if value is None:
        return False
    if isinstance(value, JsonValue):
        return bool(value.value)
    text = value.value.strip()
    return bool(text) and text.lower() not in NOT_FOUND_VALUES


def _resolve_extracted(raw: Any) -> dict[str, ExtractedValue]:
    if not isinstance(raw, dict):
        return {}
    resolved = {}
    for key, item in raw.items():
        value = resolve_value(item)
        if value is not None:
            resolved[str(key)] = value
    return resolved


def _resolve_clauses(raw: Any) -> list[AbusiveClause]:
    if not isinstance(raw, list):
        return []
    clauses = []
    for item in raw:
        if isinstance(item, str):
            clauses.append(AbusiveClause(explanation=item))
        elif isinstance(item, dict):
            severity = item.get("severity")
            if severity not in ("low", "medium", "high"):
                severity = None
            clauses.append(AbusiveClause(
                reference=item.get("reference"),
                explanation=item.get("explanation"),
                severity=severity,
            ))
    return clauses


def _notice_period(raw: Any) -> int:
    try:
        days = int(raw)
    except (TypeError, ValueError):
        return DEFAULT_NOTICE_PERIOD_DAYS
    # A stored 0 means "not extracted", same as missing
    return days or DEFAULT_NOTICE_PERIOD_DAYS


def _risk_score(raw: Any) -> Optional[float]:
    try:
        return float(raw)
    except (TypeError, ValueError):
        return None


def document_from_record(record: dict) -> ContractDocument:
    """Build a ContractDocument from a stored contract row.

    Every field is optional except the id; unparseable dates become None.
    """
    data_sources = _pick(record, "data_sources", "dataSources", {})
    return ContractDocument(
        id=str(record["id"]),
        file_name=_pick(record, "file_name", "fileName", ""),
        file_path=_pick(record, "file_path", "filePath"),
        contract_type=_pick(record, "contract_type", "contractType") or "General",
        sector=record.get("sector"),
        effective_date=parse_date(_pick(record, "effective_date", "effectiveDate")),
        renewal_date=parse_date(_pick(record, "renewal_date", "renewalDate")),
        notice_period_days=_notice_period(_pick(record, "notice_period_days", "noticePeriodDays")),
        termination_clause_reference=_pick(
            record, "termination_clause_reference", "terminationClauseReference"
        ),
        summary=record.get("summary"),
        risk_score=_risk_score(_pick(record, "risk_score", "riskScore")),
        risk_level=_pick(record, "risk_level", "riskLevel"),
        extracted_data=_resolve_extracted(_pick(record, "extracted_data", "extractedData", {})),
        data_sources={str(k): str(v) for k, v in data_sources.items()} if isinstance(data_sources, dict) else {},
        abusive_clauses=_resolve_clauses(_pick(record, "abusive_clauses", "abusiveClauses", [])),
        alerts=list(record.get("alerts") or []),
        tags=list(record.get("tags") or []),
        created_at=parse_datetime(_pick(record, "created_at", "createdAt")),
        last_modified=parse_datetime(_pick(record, "last_modified", "lastModified")),
    )


def document_to_record(document: ContractDocument) -> dict:
    """Serialize a ContractDocument to database columns"""
    return {
        "id": document.id,
        "file_name": document.file_name,
        "file_path": document.file_path,
        "contract_type": document.contract_type,
        "sector": document.sector,
        "effective_date": document.effective_date.isoformat() if document.effective_date else None,
        "renewal_date": document.renewal_date.isoformat() if document.renewal_date else None,
        "notice_period_days": document.notice_period_days,
        "termination_clause_reference": document.termination_clause_reference,
        "summary": document.summary,
        "risk_score": document.risk_score,
        "risk_level": document.risk_level,
        "extracted_data": {k: v.value for k, v in document.extracted_data.items()},
        "data_sources": document.data_sources,
        "abusive_clauses": [c.model_dump(mode="json") for c in document.abusive_clauses],
        "alerts": document.alerts,
        "tags": document.tags,
        "created_at": document.created_at.isoformat() if document.created_at else None,
        "last_modified": document.last_modified.isoformat() if document.last_modified else None,
    }


def merge_reanalysis(
    document: ContractDocument,
    extracted: dict,
    sources: Optional[dict] = None,
    now: Optional[datetime] = None,
) -> ContractDocument:
    """Merge a re-analysis into an existing document.

    Newly found values overwrite; 'not specified' answers never replace a
    value that was found before. Returns a new document.
    """
    merged = dict(document.extracted_data)
    merged_sources = dict(document.data_sources)
    for key, raw in (extracted or {}).items():
        value = resolve_value(raw)
        if value is None:
            continue
        if is_value_found(value) or key not in merged:
            merged[key] = value
            if sources and key in sources:
                merged_sources[key] = str(sources[key])
    logger.info(f"Merged {len(extracted or {})} re-analyzed fields into {document.id}")
    return document.model_copy(update={
        "extracted_data": merged,
        "data_sources": merged_sources,
        "last_modified": now or datetime.now(),
    })


def task_from_record(record: dict) -> Optional[CustomTask]:
    """Build a CustomTask from a calendar_events row, or None if it has no usable date"""
    task_date = parse_date(record.get("date"))
    if task_date is None:
        logger.warning(f"Skipping calendar event {record.get('id')}: unparseable date")
        return None
    event_type = _pick(record, "event_type", "eventType", EventCategory.OTHER.value)
    if event_type not in {c.value for c in EventCategory}:
        event_type = EventCategory.OTHER.value
    return CustomTask(
        id=str(record.get("id", "")),
        title=record.get("title") or "",
        description=record.get("description") or "",
        date=task_date,
        event_type=event_type,
        assigned_to=_pick(record, "assigned_to_member", "assignedTo"),
        assigned_to_name=_pick(record, "assigned_to_name", "assignedToName"),
    )


def validate_team_member(name: Optional[str], email: Optional[str]) -> None:
    """Raise ValueError unless both name and a well-formed email are given"""
    if not name or not email:
        raise ValueError("Name and email are required")
    if not EMAIL_PATTERN.match(email):
        raise ValueError("Invalid email format")


def member_from_record(record: dict) -> TeamMember:
    """Build a TeamMember from a team_members row"""
    return TeamMember(
        id=str(record.get("id", "")),
        name=record.get("name") or record.get("email", "").split("@")[0],
        email=record.get("email", ""),
        avatar=record.get("avatar") or "👤",
        role=_enum_value(MemberRole, record.get("role"), MemberRole.MEMBER),
        status=_enum_value(MemberStatus, record.get("status"), MemberStatus.ACTIVE),
        created_at=parse_datetime(record.get("created_at")),
    )


def _enum_value(enum_cls, raw: Any, default):
    try:
        return enum_cls(raw)
    except ValueError:
        return default
