"""Pure helpers for GitHub's OAuth web flow.

Nothing in here touches the network; the loopback listener and the token
exchange client live in ``easy_git.infra``.
"""

from __future__ import annotations

import hmac
from urllib.parse import quote, unquote, urlencode

from .exceptions import CallbackMalformedError, StateMismatchError
from .models import CallbackParams


AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
TOKEN_URL = "https://github.com/login/oauth/access_token"
DEFAULT_SCOPE = "repo"

CALLBACK_PAGE = (
    "<!DOCTYPE html>\n"
    "<html><head><meta charset=\"utf-8\"><title>easy_git</title></head>\n"
    "<body><h1>Login complete</h1>"
    "<p>You can close this window and return to the application.</p></body></html>\n"
)


def build_redirect_uri(host: str, port: int, path: str = "/callback") -> str:
    return f"http://{host}:{port}{path}"


def build_authorize_url(
    *,
    client_id: str,
    redirect_uri: str,
    state: str,
    scope: str = DEFAULT_SCOPE,
    authorize_url: str = AUTHORIZE_URL,
) -> str:
    query = urlencode(
        {
            "client_id": client_id,
            "redirect_uri": redirect_uri,
            "scope": scope,
            "state": state,
        },
        quote_via=quote,
    )
    return f"{authorize_url}?{query}"


def parse_query(query: str) -> dict[str, str]:
    """Split ``a=1&b=2`` into a dict, percent-decoding values.

    Pairs split on the first ``=`` only; a pair without ``=`` maps to "".
    """
    params: dict[str, str] = {}
    for pair in query.split("&"):
        if not pair:
            continue
        key, _, value = pair.partition("=")
        params[key] = unquote(value)
    return params


def parse_callback_target(target: str) -> CallbackParams:
    """Extract ``code`` and ``state`` from a request target such as
    ``/callback?code=abc&state=def``.

    Raises:
        CallbackMalformedError: if either parameter is missing or empty
    """
    _, _, query = target.partition("?")
    query = query.split("#", 1)[0]
    params = parse_query(query)

    code = params.get("code")
    if not code:
        raise CallbackMalformedError("code")
    state = params.get("state")
    if not state:
        raise CallbackMalformedError("state")
    return CallbackParams(code=code, state=state)


def verify_state(expected: str, received: str) -> None:
    """Raise StateMismatchError unless ``received`` equals ``expected`` exactly."""
    if not hmac.compare_digest(expected.encode("utf-8"), received.encode("utf-8")):
        raise StateMismatchError()
