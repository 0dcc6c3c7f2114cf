from __future__ import annotations

from typing import Callable

from ..services import OAuthLoginFlow


class OAuthLoginUseCase:
    def __init__(self, *, flow: OAuthLoginFlow) -> None:
        self._flow = flow

    def execute(self, on_authorize_url: Callable[[str], None] | None = None) -> str:
        """Run one interactive login and return the access token.

        The token is handed back as-is; nothing is stored.
        """
        return self._flow.login(on_authorize_url).access_token
