"""PlatformProfile resolver.

Derives the platform facts every other session decision branches on from
a ClientDescriptor. Pure: the same descriptor always yields the same
profile, so results are memoised per descriptor.
"""
import logging
from functools import lru_cache

from tranquil.shared.models import (
    ClientDescriptor,
    PlatformProfile,
    device_class_for,
)
from .config import (
    ANDROID_PATTERN,
    CHROME_PATTERN,
    IOS_PATTERN,
    MOBILE_PATTERN,
    SAFARI_PATTERN,
    TABLET_PATTERN,
)

logger = logging.getLogger(__name__)


def resolve(descriptor: ClientDescriptor) -> PlatformProfile:
    """Resolve the platform profile for a session.

    Never raises: a missing or non-string user agent resolves as an
    unknown desktop browser.

    Args:
        descriptor: Raw client signals captured at session start

    Returns:
        PlatformProfile derived from the user-agent string
    """
    user_agent = descriptor.user_agent if isinstance(descriptor.user_agent, str) else ""
    return _resolve_user_agent(user_agent)


@lru_cache(maxsize=256)
def _resolve_user_agent(user_agent: str) -> PlatformProfile:
    is_ios = bool(IOS_PATTERN.search(user_agent))
    is_safari_family = bool(SAFARI_PATTERN.search(user_agent)) and not CHROME_PATTERN.search(user_agent)
    is_mobile = bool(MOBILE_PATTERN.search(user_agent))
    is_tablet = bool(TABLET_PATTERN.search(user_agent))

    profile = PlatformProfile(
        is_ios=is_ios,
        is_safari_family=is_safari_family,
        is_ios_safari=is_ios and is_safari_family,
        is_mobile=is_mobile,
        is_tablet=is_tablet,
        is_android=bool(ANDROID_PATTERN.search(user_agent)),
        is_desktop=not is_mobile and not is_tablet,
        device_class=device_class_for(is_mobile, is_tablet),
    )

    logger.info(
        "PLATFORM_PROFILE_RESOLVED",
        extra={
            "device_class": profile.device_class.value,
            "is_ios_safari": profile.is_ios_safari,
            "user_agent_length": len(user_agent),
        }
    )
    return profile
