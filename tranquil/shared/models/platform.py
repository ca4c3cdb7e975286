"""Client platform domain models.

ClientDescriptor is what the hosting UI knows about a session at start-up
(raw user-agent string and whether the app is framed by a third-party page).
PlatformProfile is the set of facts derived from it once per session.
"""
from dataclasses import dataclass
from enum import Enum


class DeviceClass(Enum):
    """Coarse device categorization used to branch UI and flow behavior."""
    MOBILE = "mobile"
    TABLET = "tablet"
    DESKTOP = "desktop"


@dataclass(frozen=True)
class ClientDescriptor:
    """Raw client signals for one session. Never mutated."""
    user_agent: str = ""
    is_embedded_frame: bool = False


@dataclass(frozen=True)
class PlatformProfile:
    """Derived platform facts for a session.

    Invariants:
        is_ios_safari == is_ios and is_safari_family
        is_desktop == not is_mobile and not is_tablet
        device_class follows mobile > tablet > desktop precedence
    """
    is_ios: bool
    is_safari_family: bool
    is_ios_safari: bool
    is_mobile: bool
    is_tablet: bool
    is_android: bool
    is_desktop: bool
    device_class: DeviceClass

    def __post_init__(self):
        if self.is_ios_safari != (self.is_ios and self.is_safari_family):
            raise ValueError("is_ios_safari must equal is_ios and is_safari_family")
        if self.is_desktop != (not self.is_mobile and not self.is_tablet):
            raise ValueError("is_desktop must be true only when neither mobile nor tablet")
        if self.device_class != device_class_for(self.is_mobile, self.is_tablet):
            raise ValueError(
                f"device_class {self.device_class.value} inconsistent with "
                f"is_mobile={self.is_mobile}, is_tablet={self.is_tablet}"
            )

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "is_ios": self.is_ios,
            "is_safari_family": self.is_safari_family,
            "is_ios_safari": self.is_ios_safari,
            "is_mobile": self.is_mobile,
            "is_tablet": self.is_tablet,
            "is_android": self.is_android,
            "is_desktop": self.is_desktop,
            "device_class": self.device_class.value,
        }


def device_class_for(is_mobile: bool, is_tablet: bool) -> DeviceClass:
    """Resolve the device class. Mobile wins over tablet, tablet over desktop."""
    if is_mobile:
        return DeviceClass.MOBILE
    if is_tablet:
        return DeviceClass.TABLET
    return DeviceClass.DESKTOP
