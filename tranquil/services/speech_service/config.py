"""Speech Service configuration and voice preference tables.

Preference tables are ordered most-preferred first. Order is the
load-bearing property: natural-sounding US voices lead the English table,
Latin American accents lead the Spanish one.
"""
import os
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class Language(Enum):
    """Spoken languages supported by the companion voice."""
    EN = "en"   # Primary
    ES = "es"   # Secondary

    @property
    def tag_prefix(self) -> str:
        """Canonical BCP 47 prefix, e.g. 'en-'."""
        return f"{self.value}-"


PRIMARY_LANGUAGE = Language.EN
SECONDARY_LANGUAGE = Language.ES

EN_PREFERENCES: Tuple[str, ...] = (
    "Microsoft Aria Online (Natural) - English (United States)",
    "Microsoft Jenny Online (Natural) - English (United States)",
    "Google US English",
    "Samantha",
    "Victoria",
    # Non-US English
    "Microsoft Hazel Online (Natural) - English (United Kingdom)",
    "Microsoft Libby Online (Natural) - English (United Kingdom)",
    "Google UK English Female",
)

ES_PREFERENCES: Tuple[str, ...] = (
    "Microsoft Paloma Online (Natural) - Spanish (Mexico)",
    "Microsoft Dalia Online (Natural) - Spanish (Mexico)",
    "Google español de Estados Unidos",
    "Google español",
    "Paulina",
    "Monica",
)

VOICE_PREFERENCE_TABLES: Dict[Language, Tuple[str, ...]] = {
    Language.EN: EN_PREFERENCES,
    Language.ES: ES_PREFERENCES,
}

# Speech output always tries the cloud synthesizer before host voices
TTS_PRIORITY = "cloud-first"


@dataclass(frozen=True)
class SpeechConfig:
    """Configuration for the speech adapter."""

    rules_version: str = "2025.09.01"
    default_language: Language = PRIMARY_LANGUAGE

    @classmethod
    def from_env(cls) -> "SpeechConfig":
        """Create config from environment variables.

        Environment variables:
            VOICE_RULES_VERSION: Rules version reported by /health
            DEFAULT_SPEECH_LANGUAGE: "en" or "es" (default en)
        """
        language = os.getenv("DEFAULT_SPEECH_LANGUAGE", "en").strip().lower()
        return cls(
            rules_version=os.getenv("VOICE_RULES_VERSION", "2025.09.01"),
            default_language=Language.ES if language == "es" else Language.EN,
        )
