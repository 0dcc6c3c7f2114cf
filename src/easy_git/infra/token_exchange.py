from __future__ import annotations

import requests

from ..core.domain.exceptions import NetworkError, TokenExchangeError, TokenResponseParseError
from ..core.domain.oauth import TOKEN_URL
from ..core.ports import LoggerPort


class GitHubTokenExchange:
    """Exchanges an OAuth authorization code for an access token.

    The token is returned to the caller and never cached here.
    """

    def __init__(
        self,
        *,
        logger: LoggerPort,
        token_url: str = TOKEN_URL,
        timeout_s: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self._logger = logger
        self._token_url = token_url
        self._timeout_s = timeout_s
        self._session = session or requests.Session()

    def exchange(
        self,
        *,
        code: str,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
    ) -> str:
        """POST the code to the token endpoint.

        Raises:
            TokenExchangeError: non-2xx response (message is the body text), or
                an OAuth ``error`` field in the JSON body
            TokenResponseParseError: body is not JSON or lacks ``access_token``
            NetworkError: the request could not be sent
        """
        try:
            resp = self._session.post(
                self._token_url,
                data={
                    "client_id": client_id,
                    "client_secret": client_secret,
                    "code": code,
                    "redirect_uri": redirect_uri,
                },
                headers={"Accept": "application/json"},
                timeout=self._timeout_s,
            )
        except requests.RequestException as e:
            self._logger.error("token_exchange_network_error", type="token_exchange_network_error", error=str(e))
            raise NetworkError(f"Token request failed: {e}") from e

        if not resp.ok:
            self._logger.error(
                "token_exchange_rejected",
                type="token_exchange_rejected",
                status=resp.status_code,
            )
            raise TokenExchangeError(resp.text, status_code=resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            raise TokenResponseParseError(f"response is not JSON ({e})") from e
        if not isinstance(data, dict):
            raise TokenResponseParseError("response is not a JSON object")

        access_token = data.get("access_token")
        if isinstance(access_token, str) and access_token:
            self._logger.info(
                "token_obtained",
                type="token_obtained",
                scope=data.get("scope") or "",
                token_type=data.get("token_type") or "",
            )
            return access_token

        # GitHub reports a bad or expired code with 200 and an error field.
        error = data.get("error")
        if error:
            description = data.get("error_description") or ""
            message = f"{error}: {description}" if description else str(error)
            self._logger.error("token_exchange_rejected", type="token_exchange_rejected", oauth_error=error)
            raise TokenExchangeError(message, status_code=resp.status_code)
        raise TokenResponseParseError("missing 'access_token' field")
