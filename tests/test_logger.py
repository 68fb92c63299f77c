import uuid

from clamp_explorer import config, logger


def _session():
    return f"test-{uuid.uuid4().hex}"


def test_record_fields(px_config):
    sid = _session()
    first = logger.build_event_record(sid, "config_change", px_config, breakpoint_id=None, copy_target="css_clamp")
    second = logger.build_event_record(sid, "reset")
    assert first["seq"] == 1 and second["seq"] == 2
    assert first["schema_version"] == config.SCHEMA_VERSION
    assert first["mode"] == "dash"
    assert first["min_size"] == 16.0
    assert first["custom_bezier"] == "0.25,0.1,0.25,1.0"
    assert first["copy_target"] == "css_clamp"
    assert "breakpoint_id" not in first
    assert "min_size" not in second
    assert first["t_server_iso"].endswith("Z")


def test_safe_session_id():
    assert logger.safe_session_id("../etc/passwd") == "etcpasswd"
    assert logger.safe_session_id(None) == "unknown"
    assert logger.safe_session_id("///") == "unknown"


def test_log_event_appends_jsonl(log_dir, px_config):
    sid = _session()
    logger.log_event(sid, logger.build_event_record(sid, "consent_accepted"))
    logger.log_event(sid, logger.build_event_record(sid, "config_change", px_config))
    path = logger.session_log_path(sid)
    assert path.parent == log_dir
    records = logger.read_jsonl(path)
    assert [r["event"] for r in records] == ["consent_accepted", "config_change"]


def test_throttled_events_keep_the_latest_of_a_burst(log_dir, px_config, monkeypatch):
    monkeypatch.setattr(config, "LOG_RATE_LIMIT_SECONDS", 60)
    sid = _session()
    for event in ("first", "second", "third"):
        logger.log_event(sid, logger.build_event_record(sid, event, px_config), throttled=True)
    logger.close_session(sid)
    events = [r["event"] for r in logger.read_jsonl(logger.session_log_path(sid))]
    assert events == ["first", "third"]


def test_read_jsonl_skips_bad_lines(tmp_path):
    path = tmp_path / "log.jsonl"
    path.write_text('{"event": "a"}\n\nnot json\n{"event": "b"}\n', encoding="utf-8")
    assert [r["event"] for r in logger.read_jsonl(path)] == ["a", "b"]
    assert logger.read_jsonl(tmp_path / "missing.jsonl") == []


def test_write_failure_is_reported_not_raised(log_dir, monkeypatch, capsys):
    def broken(path, record):
        raise OSError("disk full")

    monkeypatch.setattr(logger, "append_jsonl", broken)
    logger.write_session_record({"session_id": "abc", "event": "x"})
    assert "[dash-log]" in capsys.readouterr().out


def test_csv_export(px_config):
    sid = _session()
    records = [
        logger.build_event_record(sid, "config_change", px_config),
        logger.build_event_record(sid, "breakpoint_add", px_config, breakpoint_id="custom-1", extra="dropped"),
    ]
    content = logger.build_csv_content(records)
    lines = content.strip().splitlines()
    assert lines[0] == ",".join(config.SCHEMA_COLUMNS)
    assert len(lines) == 3
    assert "custom-1" in lines[2]
    assert "dropped" not in content
    assert logger.build_csv_content([]) is None
