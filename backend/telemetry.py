"""Compliance telemetry: JSON-lines event log and summary reader."""

import json
import logging
import os
from collections import deque
from datetime import datetime, timezone, timedelta
from pathlib import Path
from typing import Optional

from text_utils import normalize_whitespace

logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parent

EVENT_FAILOVER = "provider_failover"
EVENT_VALIDATION = "validation"
EVENT_AUTO_REPAIR = "auto_repair"


def telemetry_enabled() -> bool:
    return (os.getenv("COMPLIANCE_TELEMETRY_ENABLED", "1") or "1").strip().lower() in (
        "1", "true", "yes", "on",
    )


def telemetry_path() -> Path:
    name = os.getenv("COMPLIANCE_TELEMETRY_LOG", "compliance_telemetry.log") or "compliance_telemetry.log"
    return _BACKEND_DIR / name


def append_compliance_telemetry(event: str, payload: Optional[dict] = None) -> None:
    """Append one event line. Write failures are logged, never raised."""
    if not telemetry_enabled():
        return
    path = telemetry_path()
    try:
        data = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "event": normalize_whitespace(event or "event"),
            "payload": payload or {},
        }
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write(json.dumps(data, ensure_ascii=False) + "\n")
    except (OSError, TypeError, ValueError) as exc:
        logger.warning("telemetry write failed path=%s detail=%s", path.name, exc)


def _parse_iso_utc(ts_raw: str) -> Optional[datetime]:
    try:
        return datetime.fromisoformat(str(ts_raw).replace("Z", "+00:00"))
    except ValueError:
        return None


def read_compliance_telemetry_summary(hours: int = 24, limit: int = 6) -> dict:
    h = max(1, min(168, int(hours or 24)))
    n = max(1, min(25, int(limit or 6)))
    now_utc = datetime.now(timezone.utc)
    cutoff = now_utc - timedelta(hours=h)
    path = telemetry_path()

    counts: dict[str, int] = {}
    violation_counts: dict[str, int] = {}
    failover_counts: dict[str, int] = {}
    passed_count = 0
    recent: deque = deque(maxlen=n)
    parse_errors = 0
    file_exists = path.exists()

    if file_exists:
        try:
            with open(path, "r", encoding="utf-8") as f:
                for line in f:
                    raw = (line or "").strip()
                    if not raw:
                        continue
                    try:
                        item = json.loads(raw)
                    except json.JSONDecodeError:
                        parse_errors += 1
                        continue
                    if not isinstance(item, dict):
                        parse_errors += 1
                        continue
                    ts = _parse_iso_utc(str(item.get("ts") or ""))
                    if not ts or ts < cutoff:
                        continue
                    event = normalize_whitespace(str(item.get("event") or "event")) or "event"
                    counts[event] = counts.get(event, 0) + 1
                    payload_obj = item.get("payload") if isinstance(item.get("payload"), dict) else {}
                    if event == EVENT_VALIDATION:
                        if payload_obj.get("passed"):
                            passed_count += 1
                        axiom_ids = payload_obj.get("violated_axioms")
                        if isinstance(axiom_ids, list):
                            for axiom_id in axiom_ids:
                                key = normalize_whitespace(str(axiom_id or "")) or "UNKNOWN"
                                violation_counts[key] = violation_counts.get(key, 0) + 1
                    elif event == EVENT_FAILOVER:
                        provider = normalize_whitespace(str(payload_obj.get("provider") or "")) or "unknown"
                        failover_counts[provider] = failover_counts.get(provider, 0) + 1
                    recent.append({"ts": ts.isoformat(), "event": event, "payload": payload_obj})
        except OSError as exc:
            logger.warning("telemetry read failed path=%s detail=%s", path.name, exc)

    validations = counts.get(EVENT_VALIDATION, 0)
    pass_rate = round((passed_count / validations) * 100.0, 2) if validations > 0 else 0.0

    return {
        "status": "ok",
        "now_utc": now_utc.isoformat(),
        "window_hours": h,
        "telemetry_enabled": telemetry_enabled(),
        "file_exists": file_exists,
        "file_path": path.name,
        "counts": counts,
        "pass_rate_percent": pass_rate,
        "violation_counts": violation_counts,
        "failover_counts": failover_counts,
        "auto_repair_count": counts.get(EVENT_AUTO_REPAIR, 0),
        "recent": list(recent),
        "parse_errors": parse_errors,
    }
