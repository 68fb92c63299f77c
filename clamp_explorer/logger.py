from __future__ import annotations

import csv
import io
import json
import re
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import config
from .debounce import Throttle
from .models import ScalingConfig

_SESSION_LOG_STATE: Dict[str, Dict[str, Any]] = {}
_SESSION_WRITERS: Dict[str, Throttle] = {}
_SAFE_ID = re.compile(r"[^A-Za-z0-9_-]")


def safe_session_id(session_id: Optional[str]) -> str:
    if isinstance(session_id, str) and session_id:
        cleaned = _SAFE_ID.sub("", session_id)
        if cleaned:
            return cleaned
    return "unknown"


def config_snapshot(cfg: Optional[ScalingConfig]) -> Dict[str, Any]:
    if cfg is None:
        return {}
    return {
        "output_unit": cfg.unit,
        "root_font_size": cfg.root_font_size,
        "min_size": cfg.min_size,
        "max_size": cfg.max_size,
        "min_screen_width": cfg.min_screen_width,
        "max_screen_width": cfg.max_screen_width,
        "scaling_function": cfg.scaling_function.value,
        "custom_bezier": ",".join(str(v) for v in cfg.custom_bezier),
    }


def next_seq_and_elapsed(session_id: str) -> Dict[str, Any]:
    state = _SESSION_LOG_STATE.setdefault(session_id, {"seq": 0, "last_t_server_ms": None})
    now_ms = int(time.time() * 1000)
    seq = state["seq"] + 1
    state["seq"] = seq
    elapsed = 0
    if state["last_t_server_ms"] is not None:
        elapsed = max(now_ms - state["last_t_server_ms"], 0)
    state["last_t_server_ms"] = now_ms
    ts = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return {"seq": seq, "elapsed_time_ms": elapsed, "t_server_iso": ts, "now_ms": now_ms}


def build_event_record(
    session_id: str,
    event: str,
    cfg: Optional[ScalingConfig] = None,
    **extras: Any,
) -> Dict[str, Any]:
    sid = safe_session_id(session_id)
    timing = next_seq_and_elapsed(sid)
    record: Dict[str, Any] = {
        "schema_version": config.SCHEMA_VERSION,
        "session_id": sid,
        "t_server_iso": timing["t_server_iso"],
        "seq": timing["seq"],
        "event": event,
        "elapsed_time_ms": timing["elapsed_time_ms"],
        "mode": config.APP_MODE,
    }
    record.update(config_snapshot(cfg))
    record.update({k: v for k, v in extras.items() if v is not None})
    return record


def session_log_path(session_id: str) -> Path:
    return config.DATA_DIR / f"session_{safe_session_id(session_id)}.jsonl"


def append_jsonl(path: Path, record: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as fh:
        fh.write(json.dumps(record, ensure_ascii=False) + "\n")
        fh.flush()


def read_jsonl(path: Path) -> List[Dict[str, Any]]:
    if not path.exists():
        return []
    records: List[Dict[str, Any]] = []
    with path.open("r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line:
                continue
            try:
                records.append(json.loads(line))
            except json.JSONDecodeError:
                continue
    return records


def write_session_record(record: Dict[str, Any]) -> None:
    path = session_log_path(record.get("session_id"))
    try:
        append_jsonl(path, record)
    except OSError as exc:
        print("[dash-log]", exc, record)


def log_event(session_id: str, record: Dict[str, Any], *, throttled: bool = False) -> None:
    """Append ``record`` to the session log.

    Throttled events (config edits while typing or dragging) go through a
    per-session rate limit that keeps the latest record of a burst.
    """
    if not throttled:
        write_session_record(record)
        return
    sid = safe_session_id(session_id)
    writer = _SESSION_WRITERS.get(sid)
    if writer is None:
        writer = Throttle(write_session_record, config.LOG_RATE_LIMIT_SECONDS)
        _SESSION_WRITERS[sid] = writer
    writer.call(record)


def close_session(session_id: str) -> None:
    """Flush and drop the session's rate limiter."""
    writer = _SESSION_WRITERS.pop(safe_session_id(session_id), None)
    if writer is not None:
        writer.flush()
        writer.cancel()


def flatten_record_for_csv(record: Dict[str, Any]) -> Dict[str, Any]:
    flat = dict.fromkeys(config.SCHEMA_COLUMNS, None)
    for key, value in record.items():
        if key in flat:
            flat[key] = value
    return flat


def build_csv_content(records: List[Dict[str, Any]]) -> Optional[str]:
    if not records:
        return None
    columns = list(config.SCHEMA_COLUMNS)
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=columns, extrasaction="ignore")
    writer.writeheader()
    for rec in records:
        writer.writerow(flatten_record_for_csv(rec))
    return buffer.getvalue()
