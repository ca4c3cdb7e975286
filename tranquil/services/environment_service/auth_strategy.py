"""Auth strategy resolver.

iOS Safari breaks popup-based identity flows, and identity flows inside a
third-party frame on iOS are unreliable. The two outputs are independent
rules and are computed separately.
"""
from dataclasses import dataclass
from enum import Enum

from tranquil.shared.models import ClientDescriptor, PlatformProfile


class AuthFlow(Enum):
    """How the identity provider sign-in is launched."""
    REDIRECT = "redirect"
    POPUP = "popup"


@dataclass(frozen=True)
class AuthDecision:
    """Identity flow decision for a session."""
    flow: AuthFlow
    suggest_open_in_new_tab: bool

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "flow": self.flow.value,
            "suggest_open_in_new_tab": self.suggest_open_in_new_tab,
        }


def decide(profile: PlatformProfile, descriptor: ClientDescriptor) -> AuthDecision:
    """Decide the identity flow for a session.

    Args:
        profile: Resolved platform profile
        descriptor: Client descriptor the profile was resolved from

    Returns:
        AuthDecision with flow and open-in-new-tab suggestion
    """
    flow = AuthFlow.REDIRECT if profile.is_ios_safari else AuthFlow.POPUP
    suggest_open_in_new_tab = profile.is_ios and bool(descriptor.is_embedded_frame)
    return AuthDecision(flow=flow, suggest_open_in_new_tab=suggest_open_in_new_tab)
