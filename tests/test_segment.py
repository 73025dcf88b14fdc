import httpx
import pytest

from conftest import BALANCE_BODY, BALANCE_URL, USAGE_URL, json_response, raise_error
from quota_segment.segment import QuotaSegment, collect


ENV = {"YESCODE_API_KEY": "test-key"}


def _segment(make_settings, make_client, routes, environ=ENV, **overrides):
    client, transport = make_client(routes)
    segment = QuotaSegment(settings=make_settings(environ, **overrides), client=client)
    return segment, transport


def test_success_scenario(make_settings, make_client) -> None:
    segment, transport = _segment(
        make_settings,
        make_client,
        {
            USAGE_URL: json_response({"daily_usage": [{"date": "2024-01-01", "total_cost": 1.5}]}),
            BALANCE_URL: json_response(BALANCE_BODY),
        },
    )

    result = segment.collect({})

    assert result is not None
    assert result.primary == "Used:$1.50"
    assert result.secondary == "Left:$50.00"
    assert result.metadata["raw_spent"] == "1.5"
    assert result.metadata["usage_endpoint"] == USAGE_URL
    assert transport.urls == [USAGE_URL, BALANCE_URL]
    assert all(r.headers["X-API-Key"] == "test-key" for r in transport.requests)


def test_offline_scenario(make_settings, make_client) -> None:
    segment, transport = _segment(
        make_settings,
        make_client,
        {
            USAGE_URL: raise_error(httpx.ConnectError),
            BALANCE_URL: raise_error(httpx.ConnectTimeout),
        },
    )

    result = segment.collect()

    assert result is not None
    assert result.primary == "Offline"
    assert result.secondary == "Offline"
    assert result.metadata["status"] == "offline"
    assert transport.urls == [USAGE_URL, BALANCE_URL]


def test_no_data_today_scenario(make_settings, make_client) -> None:
    segment, _ = _segment(
        make_settings,
        make_client,
        {
            USAGE_URL: json_response({"daily_usage": []}),
            BALANCE_URL: json_response({"total_balance": 10.0}),
        },
    )

    result = segment.collect()

    assert result.primary == "Used:$0.00"
    assert result.secondary == "Left:$10.00"
    assert result.metadata["status"] == "no_data_today"


def test_no_credential_returns_none_without_requests(make_settings, make_client) -> None:
    segment, transport = _segment(make_settings, make_client, {}, environ={})

    assert segment.collect() is None
    assert transport.requests == []


def test_disabled_segment_returns_none(make_settings, make_client) -> None:
    segment, transport = _segment(make_settings, make_client, {}, enabled=False)

    assert segment.collect() is None
    assert transport.requests == []


def test_usage_failure_still_fetches_balance(make_settings, make_client) -> None:
    segment, transport = _segment(
        make_settings,
        make_client,
        {
            USAGE_URL: json_response({"message": "unauthorized"}, status_code=401),
            BALANCE_URL: json_response(BALANCE_BODY),
        },
    )

    result = segment.collect()

    assert transport.urls == [USAGE_URL, BALANCE_URL]
    assert result.primary == "Usage Unknown"
    assert result.secondary == "Left:$50.00"
    assert "usage_endpoint" not in result.metadata


def test_balance_failure_shows_partial_result(make_settings, make_client) -> None:
    segment, _ = _segment(
        make_settings,
        make_client,
        {
            USAGE_URL: json_response({"daily_usage": [{"date": "2024-01-01", "total_cost": 3.0}]}),
            BALANCE_URL: json_response({}, status_code=500),
        },
    )

    result = segment.collect()

    assert result.primary == "Used:$3.00"
    assert result.secondary == "Balance Unknown"
    assert result.metadata["status"] == "balance_unavailable"


def test_debug_writes_diagnostics_to_stderr_only(make_settings, make_client, capsys) -> None:
    segment, _ = _segment(
        make_settings,
        make_client,
        {BALANCE_URL: json_response(BALANCE_BODY)},
        debug=True,
    )

    result = segment.collect()

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Fetching daily_usage" in captured.err
    assert "Success: balance" in captured.err
    assert "test-key" not in captured.err
    assert result.primary == "Usage Unknown"


def test_module_collect_reads_process_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    for name in ("YESCODE_API_KEY", "ANTHROPIC_API_KEY", "ANTHROPIC_AUTH_TOKEN", "QUOTA_SEGMENT_ENABLED"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))

    assert collect() is None


def test_invalid_timeout_override_falls_back_to_default(
    monkeypatch: pytest.MonkeyPatch, tmp_path, make_client
) -> None:
    for name in ("ANTHROPIC_API_KEY", "ANTHROPIC_AUTH_TOKEN", "QUOTA_SEGMENT_ENABLED", "YESCODE_DEBUG"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("YESCODE_API_KEY", "k")
    monkeypatch.setenv("QUOTA_TIMEOUT_SECONDS", "abc")
    client, _ = make_client(
        {
            USAGE_URL: json_response({"daily_usage": [{"date": "2024-01-01", "total_cost": 2.0}]}),
            BALANCE_URL: json_response(BALANCE_BODY),
        }
    )
    segment = QuotaSegment(client=client)

    assert segment.settings.timeout_seconds == 5.0
    result = segment.collect()

    assert result is not None
    assert result.primary == "Used:$2.00"
    assert result.secondary == "Left:$50.00"


def test_diagnostics_follow_each_call_settings(make_settings, make_client, capsys) -> None:
    routes = {BALANCE_URL: json_response(BALANCE_BODY)}
    debug_segment, _ = _segment(make_settings, make_client, routes, debug=True)
    quiet_segment, _ = _segment(make_settings, make_client, routes)

    debug_segment.collect()
    assert "Success: balance" in capsys.readouterr().err

    quiet_segment.collect()
    assert capsys.readouterr().err == ""
