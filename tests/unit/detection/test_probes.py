"""Tests for the player probe table."""

from sce.detection import SDK_PROBES
from sce.detection.probes import _global_path
from sce.domain import PlayerSDK


class TestProbeTable:
    """Tests for SDK_PROBES."""

    def test_probe_order(self) -> None:
        """Probes run in a fixed order."""
        assert [p.sdk for p in SDK_PROBES] == [
            PlayerSDK.HLS_JS,
            PlayerSDK.DASH_JS,
            PlayerSDK.SHAKA,
            PlayerSDK.VIDEOJS,
            PlayerSDK.JWPLAYER,
            PlayerSDK.BITMOVIN,
            PlayerSDK.PLYR,
            PlayerSDK.EYEVINN,
        ]

    def test_every_probe_has_a_signal(self) -> None:
        """Each probe can match through a global or a marker."""
        for probe in SDK_PROBES:
            assert probe.global_expression or probe.marker_selector
            assert probe.container_selector

    def test_native_and_unknown_are_not_probed(self) -> None:
        """native and unknown are never produced by the table."""
        sdks = {p.sdk for p in SDK_PROBES}
        assert PlayerSDK.NATIVE not in sdks
        assert PlayerSDK.UNKNOWN not in sdks


class TestGlobalPath:
    """Tests for the guarded property lookup builder."""

    def test_guards_each_segment(self) -> None:
        """Every prefix of the path is checked before dereferencing."""
        expression = _global_path("shaka.Player.version")
        assert expression == (
            "(typeof window.shaka !== 'undefined' && window.shaka && "
            "window.shaka.Player && window.shaka.Player.version) || null"
        )
