"""Tests for the auth strategy resolver."""
import itertools

import pytest

from tranquil.shared.models import ClientDescriptor, PlatformProfile, device_class_for
from tranquil.services.environment_service.auth_strategy import AuthFlow, decide
from tranquil.services.environment_service.platform_resolver import resolve


def make_profile(is_ios, is_safari_family, is_mobile=True, is_tablet=False):
    return PlatformProfile(
        is_ios=is_ios,
        is_safari_family=is_safari_family,
        is_ios_safari=is_ios and is_safari_family,
        is_mobile=is_mobile,
        is_tablet=is_tablet,
        is_android=False,
        is_desktop=not is_mobile and not is_tablet,
        device_class=device_class_for(is_mobile, is_tablet),
    )


ALL_PROFILES = [
    make_profile(ios, safari, mobile, tablet)
    for ios, safari, mobile, tablet in itertools.product([True, False], repeat=4)
]


class TestFlow:

    @pytest.mark.parametrize("profile", ALL_PROFILES)
    def test_redirect_iff_ios_safari(self, profile):
        decision = decide(profile, ClientDescriptor())
        expected = AuthFlow.REDIRECT if profile.is_ios_safari else AuthFlow.POPUP
        assert decision.flow == expected

    def test_iphone_safari_redirects(self):
        descriptor = ClientDescriptor(
            user_agent="Mozilla/5.0 (iPhone; CPU iPhone OS 17_5 like Mac OS X) Version/17.5 Safari/604.1",
        )
        assert decide(resolve(descriptor), descriptor).flow == AuthFlow.REDIRECT

    def test_desktop_chrome_uses_popup(self):
        descriptor = ClientDescriptor(user_agent="Mozilla/5.0 (Windows NT 10.0) Chrome/126.0 Safari/537.36")
        assert decide(resolve(descriptor), descriptor).flow == AuthFlow.POPUP


class TestOpenInNewTab:

    def test_ios_in_frame_suggests_new_tab(self):
        decision = decide(make_profile(True, True), ClientDescriptor(is_embedded_frame=True))
        assert decision.suggest_open_in_new_tab is True

    def test_ios_chrome_in_frame_suggests_new_tab_but_keeps_popup(self):
        decision = decide(make_profile(True, False), ClientDescriptor(is_embedded_frame=True))

        assert decision.suggest_open_in_new_tab is True
        assert decision.flow == AuthFlow.POPUP

    def test_ios_safari_outside_frame(self):
        decision = decide(make_profile(True, True), ClientDescriptor(is_embedded_frame=False))

        assert decision.suggest_open_in_new_tab is False
        assert decision.flow == AuthFlow.REDIRECT

    def test_non_ios_in_frame(self):
        decision = decide(make_profile(False, True), ClientDescriptor(is_embedded_frame=True))
        assert decision.suggest_open_in_new_tab is False

    def test_to_dict(self):
        decision = decide(make_profile(True, True), ClientDescriptor(is_embedded_frame=True))
        assert decision.to_dict() == {"flow": "redirect", "suggest_open_in_new_tab": True}
