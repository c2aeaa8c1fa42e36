"""Tests for the caption presence check."""

import pytest

from sce.checks import check_captions
from sce.checks.captions import collect_player_api_tracks, manifest_caption_tracks
from sce.domain import ManifestFormat, ManifestInfo, ManifestTrack
from sce.page import ScriptEvaluationError, StaticPage


def _manifest(*tracks: ManifestTrack) -> ManifestInfo:
    return ManifestInfo(
        url="https://cdn.example.com/master.m3u8",
        manifest_format=ManifestFormat.HLS,
        subtitle_tracks=tracks,
    )


class ApiTrackPage(StaticPage):
    """StaticPage that answers the text track script."""

    api_tracks: list[dict] = []

    async def evaluate(self, expression):
        return self.api_tracks


class TestCheckCaptions:
    """Tests for check_captions()."""

    @pytest.mark.asyncio
    async def test_dom_tracks(self, load_page) -> None:
        """Captions and subtitles tracks are collected with their owner."""
        result = await check_captions(load_page("compliant-player.html"), [])

        assert result.has_captions is True
        assert result.has_language_attributes is True
        assert [(t.kind, t.srclang) for t in result.dom_tracks] == [
            ("captions", "en"),
            ("subtitles", "sv"),
        ]
        assert {t.parent_selector for t in result.dom_tracks} == {"#main-video"}
        assert result.dom_tracks[0].src == "/subs/en.vtt"
        assert result.dom_tracks[0].label == "English"

    @pytest.mark.asyncio
    async def test_description_tracks_are_not_captions(self, load_page) -> None:
        """Descriptions tracks do not count toward captions."""
        result = await check_captions(load_page("compliant-player.html"), [])
        assert result.track_count == 2

    @pytest.mark.asyncio
    async def test_no_tracks(self, load_page) -> None:
        """A page without tracks or manifests has no captions."""
        result = await check_captions(load_page("no-captions.html"), [])
        assert result.has_captions is False
        assert result.track_count == 0

    @pytest.mark.asyncio
    async def test_missing_srclang(self, load_page) -> None:
        """One untagged track clears has_language_attributes."""
        result = await check_captions(load_page("no-aria.html"), [])
        assert result.has_captions is True
        assert result.has_language_attributes is False
        assert result.dom_tracks[0].srclang is None

    @pytest.mark.asyncio
    async def test_manifest_tracks(self, load_page) -> None:
        """Manifest subtitle renditions count as captions."""
        manifests = [
            _manifest(ManifestTrack(language="en", name="English")),
            _manifest(ManifestTrack(language="de", name="Deutsch")),
        ]
        result = await check_captions(load_page("no-captions.html"), manifests)

        assert result.has_captions is True
        assert [t.language for t in result.manifest_tracks] == ["en", "de"]
        assert result.has_language_attributes is True

    @pytest.mark.asyncio
    async def test_manifest_track_without_language(self, load_page) -> None:
        """Manifest tracks without a language are flagged too."""
        manifests = [_manifest(ManifestTrack(name="Unknown"))]
        result = await check_captions(load_page("no-captions.html"), manifests)
        assert result.has_language_attributes is False

    @pytest.mark.asyncio
    async def test_no_captions_keeps_language_flag(self, load_page) -> None:
        """With no tracks at all, no language is missing."""
        result = await check_captions(load_page("no-captions.html"), [])
        assert result.has_language_attributes is True

    @pytest.mark.asyncio
    async def test_broken_page_yields_empty_result(self, broken_page) -> None:
        """Failing queries leave the DOM and API sources empty."""
        result = await check_captions(broken_page, [])
        assert result.dom_tracks == ()
        assert result.player_api_tracks == ()
        assert result.has_captions is False


class TestPlayerApiTracks:
    """Tests for collect_player_api_tracks()."""

    @pytest.mark.asyncio
    async def test_filters_caption_kinds(self) -> None:
        """Only captions and subtitles text tracks are reported."""
        page = ApiTrackPage.from_html("<video></video>")
        page.api_tracks = [
            {"label": "English", "language": "en", "kind": "subtitles"},
            {"label": "Chapters", "language": "en", "kind": "chapters"},
            {"label": None, "language": None, "kind": "captions"},
        ]
        tracks = await collect_player_api_tracks(page)

        assert [(t.label, t.language, t.kind) for t in tracks] == [
            ("English", "en", "subtitles"),
            (None, None, "captions"),
        ]

    @pytest.mark.asyncio
    async def test_api_tracks_feed_language_check(self) -> None:
        """An API track without language clears has_language_attributes."""
        page = ApiTrackPage.from_html("<video></video>")
        page.api_tracks = [{"label": "Auto", "language": None, "kind": "captions"}]
        result = await check_captions(page, [])
        assert result.has_captions is True
        assert result.has_language_attributes is False

    @pytest.mark.asyncio
    async def test_static_page_has_no_api(self) -> None:
        """Pages without a script runtime report no API tracks."""
        page = StaticPage.from_html("<video></video>")
        assert await collect_player_api_tracks(page) == ()

    @pytest.mark.asyncio
    async def test_evaluation_error_is_isolated(self, broken_page) -> None:
        """A failing script means no API tracks."""
        assert await collect_player_api_tracks(broken_page) == ()
        assert broken_page.calls == ["evaluate"]


class TestManifestCaptionTracks:
    """Tests for manifest_caption_tracks()."""

    def test_flattens_in_order(self) -> None:
        """Tracks from every manifest are concatenated in order."""
        a = ManifestTrack(language="en")
        b = ManifestTrack(language="fr")
        c = ManifestTrack(language="sv")
        assert manifest_caption_tracks([_manifest(a, b), _manifest(c)]) == (a, b, c)

    def test_empty(self) -> None:
        """No manifests means no tracks."""
        assert manifest_caption_tracks([]) == ()


class TestClosedPage:
    """Closed pages abort the check."""

    @pytest.mark.asyncio
    async def test_closed_page_propagates(self, closed_page) -> None:
        """PageClosedError is not treated as an evaluation failure."""
        from sce.page import PageClosedError

        with pytest.raises(PageClosedError):
            await check_captions(closed_page, [])

    def test_closed_is_not_evaluation_error(self) -> None:
        """The two page errors are siblings."""
        from sce.page import PageClosedError

        assert not issubclass(PageClosedError, ScriptEvaluationError)
