"""Speech Service: voice selection and speech recognition strategy.

Components:
- voice_selector.py: select_voice() over ranked per-language preference tables
- recognition_strategy.py: decide_recognition() for speech input
- config.py: Preference tables and Language
- handler.py: Flask HTTP endpoints (/health, /voice/select)
"""

from .config import (
    EN_PREFERENCES,
    ES_PREFERENCES,
    Language,
    SpeechConfig,
)
from .recognition_strategy import (
    RecognitionStrategy,
    SpeechCapabilities,
    decide_recognition,
)
from .voice_selector import VoiceCandidate, select_voice

__all__ = [
    "EN_PREFERENCES",
    "ES_PREFERENCES",
    "Language",
    "SpeechConfig",
    "RecognitionStrategy",
    "SpeechCapabilities",
    "decide_recognition",
    "VoiceCandidate",
    "select_voice",
]
