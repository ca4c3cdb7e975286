"""Environment Service configuration and user-agent token patterns.

Patterns are matched with re.search against the raw user-agent string.
iOS and Safari tests are case-sensitive; the device-class token sets are
not. The mobile set deliberately includes iPad, so an iPad matches both
the mobile and tablet sets and classifies as mobile.
"""
import os
import re
from dataclasses import dataclass
from typing import Pattern


@dataclass(frozen=True)
class EnvironmentConfig:
    """Configuration for the environment adapter."""

    # Version tracking for platform rule changes
    rules_version: str = "2025.09.01"

    @classmethod
    def from_env(cls) -> "EnvironmentConfig":
        """Create config from environment variables.

        Environment variables:
            PLATFORM_RULES_VERSION: Rules version reported by /health
        """
        return cls(
            rules_version=os.getenv("PLATFORM_RULES_VERSION", "2025.09.01"),
        )


IOS_PATTERN: Pattern[str] = re.compile(r"iPhone|iPad|iPod")

SAFARI_PATTERN: Pattern[str] = re.compile(r"Safari")

# Chrome on iOS reports Safari tokens too (as "CriOS")
CHROME_PATTERN: Pattern[str] = re.compile(r"Chrome|CriOS")

MOBILE_PATTERN: Pattern[str] = re.compile(
    r"Android|iPhone|iPad|iPod|BlackBerry|IEMobile|Opera Mini",
    re.IGNORECASE,
)

# gt-p/gt-n: Galaxy Tab/Note, sgh-t: Samsung, sm-t: Galaxy Tab S
TABLET_PATTERN: Pattern[str] = re.compile(
    r"tablet|ipad|kindle|silk|gt-p|gt-n|sgh-t|nexus|sm-t",
    re.IGNORECASE,
)

ANDROID_PATTERN: Pattern[str] = re.compile(r"android", re.IGNORECASE)
