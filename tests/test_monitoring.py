import json
import logging

from riskscope.runtime.monitoring import log_tool_event


def test_log_tool_event_emits_json_line(caplog) -> None:
    caplog.set_level(logging.INFO, logger="riskscope.runtime.monitoring")
    log_tool_event(tool="parse_portfolio_csv", latency_ms=12.34567, success=True, warning_count=2, detail="schwab")
    payload = json.loads(caplog.records[-1].getMessage())
    assert payload["tool"] == "parse_portfolio_csv"
    assert payload["latency_ms"] == 12.346
    assert payload["success"] is True
    assert payload["warning_count"] == 2
    assert payload["detail"] == "schwab"
