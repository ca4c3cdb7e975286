"""Environment Service: per-session platform facts and auth strategy.

Components:
- platform_resolver.py: resolve() ClientDescriptor -> PlatformProfile
- auth_strategy.py: decide() redirect vs popup identity flow
- config.py: User-agent token patterns
- handler.py: Flask HTTP endpoints (/health, /ready, /session/profile)
"""

from .auth_strategy import AuthDecision, AuthFlow, decide
from .config import EnvironmentConfig
from .platform_resolver import resolve

__all__ = [
    "AuthDecision",
    "AuthFlow",
    "decide",
    "EnvironmentConfig",
    "resolve",
]
