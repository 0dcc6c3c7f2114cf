from urllib.parse import parse_qs, urlsplit

import pytest

from easy_git.core.domain.exceptions import (
    CallbackMalformedError,
    ListenerBindError,
    MissingCredentialError,
    StateMismatchError,
    TokenExchangeError,
)
from easy_git.core.services import OAuthLoginFlow, OAuthPhase

from fakes import FakeBrowser, FakeCredentials, FakeListener, FakeLogger, FakeTokenExchange, FixedState


def _echo_state(url: str) -> str:
    state = parse_qs(urlsplit(url).query)["state"][0]
    return f"/callback?code=the-code&state={state}"


def _flow(*, credentials=None, listener=None, browser_result=True, exchange=None, state="0123456789abcdef0123456789abcdef"):
    listener = listener or FakeListener()
    browser = FakeBrowser(listener, result=browser_result)
    exchange = exchange or FakeTokenExchange()
    logger = FakeLogger()
    flow = OAuthLoginFlow(
        credentials=credentials or FakeCredentials(),
        listener=listener,
        browser=browser,
        token_exchange=exchange,
        state_gen=FixedState(state),
        logger=logger,
    )
    return flow, listener, browser, exchange, logger


def _phases(logger):
    return [kw["phase"] for _, m, kw in logger.records if m == "oauth_phase"]


def test_happy_path_returns_token_and_sends_code():
    flow, listener, browser, exchange, logger = _flow()
    listener.target = _echo_state

    result = flow.login()

    assert result.access_token == "gho_exchanged"
    assert exchange.calls == [
        {
            "code": "the-code",
            "client_id": "cid",
            "client_secret": "csecret",
            "redirect_uri": "http://127.0.0.1:17811/callback",
        }
    ]
    assert listener.released == 1
    assert flow.phase is OAuthPhase.TERMINAL
    assert _phases(logger) == [
        "awaiting_credentials",
        "listener_bound",
        "browser_launched",
        "awaiting_callback",
        "callback_received",
        "validated",
        "terminal",
    ]


def test_authorize_url_uses_bound_port_and_state():
    flow, listener, browser, _, _ = _flow(listener=FakeListener(port=50123))
    listener.target = _echo_state

    flow.login()

    query = parse_qs(urlsplit(browser.opened[0]).query)
    assert query["redirect_uri"] == ["http://127.0.0.1:50123/callback"]
    assert query["state"] == ["0123456789abcdef0123456789abcdef"]
    assert query["client_id"] == ["cid"]
    assert query["scope"] == ["repo"]


def test_authorize_url_is_reported_to_caller():
    flow, listener, browser, _, _ = _flow()
    listener.target = _echo_state
    seen = []

    flow.login(seen.append)

    assert seen == browser.opened


def test_state_mismatch_never_exchanges():
    flow, listener, _, exchange, logger = _flow()
    listener.target = "/callback?code=the-code&state=forged"

    with pytest.raises(StateMismatchError):
        flow.login()

    assert exchange.calls == []
    assert "rejected" in _phases(logger)
    assert flow.phase is OAuthPhase.TERMINAL


def test_malformed_callback_raises_and_never_exchanges():
    flow, listener, _, exchange, _ = _flow()
    listener.target = "/callback?state=0123456789abcdef0123456789abcdef"

    with pytest.raises(CallbackMalformedError):
        flow.login()

    assert exchange.calls == []


def test_missing_credentials_fail_before_binding():
    flow, listener, browser, _, _ = _flow(credentials=FakeCredentials(missing="GITHUB_OAUTH_CLIENT_ID"))

    with pytest.raises(MissingCredentialError, match="GITHUB_OAUTH_CLIENT_ID"):
        flow.login()

    assert listener.bound == 0
    assert browser.opened == []


def test_bind_failure_does_not_open_browser():
    flow, _, browser, _, _ = _flow(listener=FakeListener(bind_error=ListenerBindError(17811, "Address already in use")))

    with pytest.raises(ListenerBindError):
        flow.login()

    assert browser.opened == []
    assert flow.phase is OAuthPhase.TERMINAL


def test_browser_failure_is_not_fatal():
    flow, listener, _, _, logger = _flow(browser_result=False)
    listener.target = _echo_state

    result = flow.login()

    assert result.access_token == "gho_exchanged"
    assert "browser_launch_failed" in logger.messages()


def test_listener_released_before_token_exchange():
    listener = FakeListener()
    listener.target = _echo_state

    class CheckingExchange(FakeTokenExchange):
        def exchange(self, **kwargs):
            assert listener.released == 1
            return super().exchange(**kwargs)

    flow, *_ = _flow(listener=listener, exchange=CheckingExchange())
    flow.login()


def test_exchange_error_propagates():
    flow, listener, _, _, _ = _flow(exchange=FakeTokenExchange(error=TokenExchangeError("bad_verification_code")))
    listener.target = _echo_state

    with pytest.raises(TokenExchangeError, match="bad_verification_code"):
        flow.login()

    assert flow.phase is OAuthPhase.TERMINAL


def test_state_never_reaches_logs():
    flow, listener, _, _, logger = _flow(browser_result=False)
    listener.target = _echo_state

    flow.login()

    logged = repr(logger.records)
    assert "0123456789abcdef0123456789abcdef" not in logged
    assert "https://github.com/login/oauth/authorize" in logged
