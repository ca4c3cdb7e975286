"""Speech recognition strategy resolver.

Browser speech recognition is unusable on iOS Safari even where the API
exists. When it is unusable the client records audio itself and streams it
to the cloud recognizer, which needs microphone access plus either a media
recorder or an audio context.
"""
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from tranquil.shared.models import PlatformProfile


class RecognitionStrategy(Enum):
    """Where speech input is transcribed."""
    BROWSER = "browser"
    CLOUD = "cloud"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class SpeechCapabilities:
    """Speech-related capabilities reported by the host."""
    has_browser_recognition: bool = False
    can_access_microphone: bool = False
    has_media_recorder: bool = False
    has_audio_context: bool = False

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "SpeechCapabilities":
        """Build from an API payload; missing flags are False.

        Anything other than a mapping yields no capabilities.
        """
        if not isinstance(data, Mapping):
            return cls()
        return cls(
            has_browser_recognition=data.get("has_browser_recognition") is True,
            can_access_microphone=data.get("can_access_microphone") is True,
            has_media_recorder=data.get("has_media_recorder") is True,
            has_audio_context=data.get("has_audio_context") is True,
        )


def decide_recognition(
    profile: PlatformProfile,
    capabilities: SpeechCapabilities,
) -> RecognitionStrategy:
    """Choose the speech recognition strategy for a session."""
    if capabilities.has_browser_recognition and not profile.is_ios_safari:
        return RecognitionStrategy.BROWSER
    if capabilities.can_access_microphone and (
        capabilities.has_media_recorder or capabilities.has_audio_context
    ):
        return RecognitionStrategy.CLOUD
    return RecognitionStrategy.UNAVAILABLE
