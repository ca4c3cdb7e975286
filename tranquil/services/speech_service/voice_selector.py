"""Voice preference resolver.

Picks the synthetic voice used to speak companion replies from the voices
the host reports at query time. Host-reported voices change between
queries (they load lazily in most browsers), so nothing is cached here.

Selection order, first match wins:
1. Exact name match walking the language's preference table top to bottom
2. Any voice whose language tag starts with the language prefix
3. Any voice at all
4. None
"""
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from .config import PRIMARY_LANGUAGE, VOICE_PREFERENCE_TABLES, Language

logger = logging.getLogger(__name__)

LANGUAGE_ALIASES = {
    "en": Language.EN,
    "primary": Language.EN,
    "es": Language.ES,
    "secondary": Language.ES,
}


@dataclass(frozen=True)
class VoiceCandidate:
    """A synthetic voice available on the host right now."""
    name: str
    language_tag: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VoiceCandidate":
        """Build from a host voice payload ('lang' or 'language_tag')."""
        tag = data.get("language_tag", data.get("lang")) or ""
        return cls(name=str(data.get("name") or ""), language_tag=str(tag))

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {"name": self.name, "language_tag": self.language_tag}


def coerce_language(language: Union[Language, str, None]) -> Language:
    """Map a language enum or alias to a Language.

    Unknown values fall back to the primary language.
    """
    if isinstance(language, Language):
        return language
    if isinstance(language, str):
        return LANGUAGE_ALIASES.get(language.strip().lower(), PRIMARY_LANGUAGE)
    return PRIMARY_LANGUAGE


def select_voice(
    language: Union[Language, str],
    available: Iterable[VoiceCandidate],
) -> Optional[VoiceCandidate]:
    """Select the best available voice for a language.

    Args:
        language: Target language (Language, or "en"/"es"/"primary"/"secondary")
        available: Voices the host can provide, in host order. Not mutated.

    Returns:
        The chosen VoiceCandidate, or None if no voices are available
    """
    lang = coerce_language(language)
    voices = tuple(available)

    voice = _pick_first_preferred(VOICE_PREFERENCE_TABLES[lang], voices)
    tier = "preferred"
    if voice is None:
        voice = _pick_first_with_prefix(lang.tag_prefix, voices)
        tier = "language"
    if voice is None and voices:
        voice = voices[0]
        tier = "any"
    if voice is None:
        tier = "none"

    logger.info(
        "VOICE_SELECTED",
        extra={
            "language": lang.value,
            "tier": tier,
            "available_count": len(voices),
            "voice_name": voice.name if voice else None,
        }
    )
    return voice


def _pick_first_preferred(
    names: Sequence[str],
    voices: Sequence[VoiceCandidate],
) -> Optional[VoiceCandidate]:
    # Table order decides, not host order
    for name in names:
        for voice in voices:
            if voice.name == name:
                return voice
    return None


def _pick_first_with_prefix(
    prefix: str,
    voices: Sequence[VoiceCandidate],
) -> Optional[VoiceCandidate]:
    for voice in voices:
        if str(voice.language_tag or "").lower().startswith(prefix):
            return voice
    return None
