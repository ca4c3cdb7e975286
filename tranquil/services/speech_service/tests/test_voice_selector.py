"""Tests for the voice preference resolver."""
import pytest

from tranquil.services.speech_service.config import (
    EN_PREFERENCES,
    ES_PREFERENCES,
    Language,
)
from tranquil.services.speech_service.voice_selector import (
    VoiceCandidate,
    coerce_language,
    select_voice,
)

ARIA = VoiceCandidate("Microsoft Aria Online (Natural) - English (United States)", "en-US")
SAMANTHA = VoiceCandidate("Samantha", "en-US")
PAULINA = VoiceCandidate("Paulina", "es-MX")
PALOMA = VoiceCandidate("Microsoft Paloma Online (Natural) - Spanish (Mexico)", "es-MX")


class TestPreferenceTier:

    def test_preferred_voice_wins_regardless_of_position(self):
        available = [VoiceCandidate("X"), ARIA]
        assert select_voice(Language.EN, available) == ARIA

    def test_table_order_beats_host_order(self):
        available = [SAMANTHA, ARIA]
        assert select_voice(Language.EN, available) == ARIA

    def test_lower_ranked_name_still_beats_language_match(self):
        british = VoiceCandidate("Google UK English Female", "en-GB")
        available = [VoiceCandidate("Unknown", "en-US"), british]
        assert select_voice(Language.EN, available) == british

    def test_spanish_table(self):
        available = [ARIA, PAULINA, PALOMA]
        assert select_voice(Language.ES, available) == PALOMA

    def test_name_match_is_exact(self):
        available = [VoiceCandidate("samantha", "fr-FR")]
        # Falls to the any-voice tier, not the preference tier
        assert select_voice(Language.EN, available).name == "samantha"

    def test_tables_are_distinct(self):
        assert not set(EN_PREFERENCES) & set(ES_PREFERENCES)


class TestFallbackTiers:

    def test_language_prefix_tier(self):
        unknown = VoiceCandidate("Unknown Voice", "en-GB")
        assert select_voice(Language.EN, [unknown]) == unknown

    def test_language_prefix_is_case_insensitive(self):
        french = VoiceCandidate("Amelie", "fr-CA")
        spanish = VoiceCandidate("Jorge", "ES-es")
        assert select_voice(Language.ES, [french, spanish]) == spanish

    def test_bare_language_tag_does_not_match_prefix(self):
        bare = VoiceCandidate("Bare", "en")
        other = VoiceCandidate("Other", "en-AU")
        assert select_voice(Language.EN, [bare, other]) == other

    def test_any_voice_tier(self):
        french = VoiceCandidate("Amelie", "fr-FR")
        german = VoiceCandidate("Anna", "de-DE")
        assert select_voice(Language.ES, [french, german]) == french

    def test_no_voices(self):
        assert select_voice(Language.EN, []) is None


class TestInputHandling:

    def test_available_not_mutated(self):
        available = [VoiceCandidate("X", "fr-FR"), SAMANTHA]
        snapshot = list(available)
        select_voice(Language.EN, available)
        assert available == snapshot

    def test_accepts_generator(self):
        assert select_voice(Language.EN, (v for v in [SAMANTHA])) == SAMANTHA

    @pytest.mark.parametrize("alias,expected", [
        ("en", Language.EN),
        ("primary", Language.EN),
        ("ES", Language.ES),
        ("secondary", Language.ES),
        ("klingon", Language.EN),
        (None, Language.EN),
    ])
    def test_language_aliases(self, alias, expected):
        assert coerce_language(alias) == expected

    def test_string_language(self):
        assert select_voice("secondary", [ARIA, PAULINA]) == PAULINA

    def test_missing_language_tag(self):
        voice = VoiceCandidate("Nameless")
        assert select_voice(Language.EN, [voice]) == voice

    def test_non_string_language_tag(self):
        odd = VoiceCandidate("Odd", 42)
        spanish = VoiceCandidate("Jorge", "es-ES")
        assert select_voice(Language.ES, [odd, spanish]) == spanish

    def test_from_dict_accepts_lang_key(self):
        voice = VoiceCandidate.from_dict({"name": "Monica", "lang": "es-ES"})
        assert voice == VoiceCandidate("Monica", "es-ES")
