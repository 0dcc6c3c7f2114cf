from __future__ import annotations

from enum import Enum
from typing import Callable

from ..domain.exceptions import ProtocolError
from ..domain.models import OAuthSession, TokenResult
from ..domain.oauth import (
    AUTHORIZE_URL,
    DEFAULT_SCOPE,
    build_authorize_url,
    build_redirect_uri,
    parse_callback_target,
    verify_state,
)
from ..ports import (
    BrowserPort,
    CallbackListenerPort,
    CredentialProviderPort,
    LoggerPort,
    StateGeneratorPort,
    TokenExchangePort,
)


class OAuthPhase(str, Enum):
    IDLE = "idle"
    AWAITING_CREDENTIALS = "awaiting_credentials"
    LISTENER_BOUND = "listener_bound"
    BROWSER_LAUNCHED = "browser_launched"
    AWAITING_CALLBACK = "awaiting_callback"
    CALLBACK_RECEIVED = "callback_received"
    VALIDATED = "validated"
    REJECTED = "rejected"
    TERMINAL = "terminal"


class OAuthLoginFlow:
    """Runs one GitHub OAuth web-flow login over a loopback redirect.

    A flow object is good for a single attempt at a time: the callback port
    is a process-wide resource and a second concurrent bind fails.
    """

    def __init__(
        self,
        *,
        credentials: CredentialProviderPort,
        listener: CallbackListenerPort,
        browser: BrowserPort,
        token_exchange: TokenExchangePort,
        state_gen: StateGeneratorPort,
        logger: LoggerPort,
        host: str = "127.0.0.1",
        callback_path: str = "/callback",
        scope: str = DEFAULT_SCOPE,
        authorize_url: str = AUTHORIZE_URL,
    ) -> None:
        self._credentials = credentials
        self._listener = listener
        self._browser = browser
        self._token_exchange = token_exchange
        self._state_gen = state_gen
        self._logger = logger
        self._host = host
        self._callback_path = callback_path
        self._scope = scope
        self._authorize_url = authorize_url
        self.phase = OAuthPhase.IDLE

    def login(self, on_authorize_url: Callable[[str], None] | None = None) -> TokenResult:
        """Execute the login and return the access token.

        ``on_authorize_url`` receives the authorize URL once the listener is
        bound, so a caller can show it for manual navigation.

        Raises:
            MissingCredentialError: client id or secret not configured
            ListenerBindError: callback port unavailable
            CallbackMalformedError: callback lacks code or state
            StateMismatchError: callback state differs from the generated one
            TokenExchangeError / TokenResponseParseError / NetworkError:
                token endpoint failures
        """
        try:
            return self._login(on_authorize_url)
        except ProtocolError:
            self._enter(OAuthPhase.REJECTED)
            raise
        finally:
            self._enter(OAuthPhase.TERMINAL)

    def _login(self, on_authorize_url: Callable[[str], None] | None) -> TokenResult:
        self._enter(OAuthPhase.AWAITING_CREDENTIALS)
        credentials = self._credentials.load()

        with self._listener.bind() as pending:
            self._enter(OAuthPhase.LISTENER_BOUND, port=pending.port)
            session = OAuthSession(
                state=self._state_gen.generate(),
                redirect_uri=build_redirect_uri(self._host, pending.port, self._callback_path),
                client_id=credentials.client_id,
                client_secret=credentials.client_secret,
            )
            url = build_authorize_url(
                client_id=session.client_id,
                redirect_uri=session.redirect_uri,
                state=session.state,
                scope=self._scope,
                authorize_url=self._authorize_url,
            )

            # The query carries the live state; only the endpoint is logged
            endpoint = url.split("?", 1)[0]
            if not self._browser.open(url):
                self._logger.warning("browser_launch_failed", type="browser_launch_failed", url=endpoint)
            self._enter(OAuthPhase.BROWSER_LAUNCHED, url=endpoint)
            if on_authorize_url is not None:
                on_authorize_url(url)

            self._enter(OAuthPhase.AWAITING_CALLBACK)
            target = pending.receive()

        self._enter(OAuthPhase.CALLBACK_RECEIVED)
        params = parse_callback_target(target)
        verify_state(session.state, params.state)
        self._enter(OAuthPhase.VALIDATED)

        access_token = self._token_exchange.exchange(
            code=params.code,
            client_id=session.client_id,
            client_secret=session.client_secret,
            redirect_uri=session.redirect_uri,
        )
        return TokenResult(access_token=access_token)

    def _enter(self, phase: OAuthPhase, **fields) -> None:
        self.phase = phase
        self._logger.info("oauth_phase", type="oauth_phase", phase=phase.value, **fields)
