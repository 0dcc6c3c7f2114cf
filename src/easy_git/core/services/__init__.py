from __future__ import annotations

from .revert_pipeline import RevertPipeline
from .oauth_flow import OAuthLoginFlow, OAuthPhase

__all__ = [
    "RevertPipeline",
    "OAuthLoginFlow",
    "OAuthPhase",
]
