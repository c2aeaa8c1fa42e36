"""Tests for focus indicator detection."""

import pytest

from sce.checks.accessibility import check_focus_indicators
from sce.checks.accessibility.focus import has_focus_indicator, parse_width
from sce.domain import DetectedPlayer, FocusIndicatorResult, PlayerSDK
from sce.page import StaticPage


def _player(container: str) -> DetectedPlayer:
    return DetectedPlayer(sdk=PlayerSDK.NATIVE, container_selector=container)


class RecordingPage(StaticPage):
    """StaticPage that records focus and blur calls."""

    def __init__(self, soup) -> None:
        super().__init__(soup)
        self.events: list[tuple[str, str]] = []

    async def focus(self, element) -> None:
        self.events.append(("focus", element.name))

    async def blur(self, element) -> None:
        self.events.append(("blur", element.name))


class TestParseWidth:
    """Tests for parse_width()."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("2px", 2.0),
            ("0.5em", 0.5),
            ("0px", 0.0),
            ("thin", 1.0),
            ("Medium", 3.0),
            ("thick", 5.0),
            ("", 0.0),
            (None, 0.0),
            ("auto", 0.0),
        ],
    )
    def test_values(self, value: str | None, expected: float) -> None:
        """Lengths and keywords are converted to numbers."""
        assert parse_width(value) == expected


class TestHasFocusIndicator:
    """Tests for has_focus_indicator()."""

    def test_outline(self) -> None:
        """A visible outline with width counts."""
        style = {"outline-style": "solid", "outline-width": "2px", "box-shadow": "none"}
        assert has_focus_indicator(style) is True

    def test_zero_width_outline(self) -> None:
        """An outline with no width does not count."""
        style = {"outline-style": "solid", "outline-width": "0px", "box-shadow": "none"}
        assert has_focus_indicator(style) is False

    def test_outline_none(self) -> None:
        """outline-style none hides the outline regardless of width."""
        style = {"outline-style": "none", "outline-width": "3px", "box-shadow": "none"}
        assert has_focus_indicator(style) is False

    def test_box_shadow(self) -> None:
        """A box shadow counts as an indicator."""
        style = {"outline-style": "none", "outline-width": "0px", "box-shadow": "0 0 0 2px blue"}
        assert has_focus_indicator(style) is True

    def test_empty_style(self) -> None:
        """No styles means no indicator."""
        assert has_focus_indicator({}) is False


class TestCheckFocusIndicators:
    """Tests for check_focus_indicators()."""

    @pytest.mark.asyncio
    async def test_compliant_player(self, load_page) -> None:
        """Inline outlines and shadows are detected on every control."""
        result = await check_focus_indicators(
            load_page("compliant-player.html"), _player("#player")
        )
        assert result.controls_with_focus_indicator == (
            "Play",
            "Captions",
            "Audio description",
            "Volume",
            "Fullscreen",
            "Opacity",
        )
        assert result.controls_without_focus_indicator == ()

    @pytest.mark.asyncio
    async def test_no_styles(self, load_page) -> None:
        """Unstyled controls fall back to their tag name as label."""
        result = await check_focus_indicators(
            load_page("no-aria.html"), _player("div.player-shell")
        )
        assert result.controls_with_focus_indicator == ()
        assert result.controls_without_focus_indicator == ("button", "button", "div")

    @pytest.mark.asyncio
    async def test_focus_then_blur(self) -> None:
        """Each control is focused before styles are read, then blurred."""
        page = RecordingPage.from_html(
            '<div id="p"><button>Play</button><a href="#x">More</a></div>'
        )
        await check_focus_indicators(page, _player("#p"))
        assert page.events == [
            ("focus", "button"),
            ("blur", "button"),
            ("focus", "a"),
            ("blur", "a"),
        ]

    @pytest.mark.asyncio
    async def test_label_truncation(self) -> None:
        """Text labels are cut to 30 characters."""
        page = StaticPage.from_html(f'<div id="p"><button>{"y" * 40}</button></div>')
        result = await check_focus_indicators(page, _player("#p"))
        assert result.controls_without_focus_indicator == ("y" * 30,)

    @pytest.mark.asyncio
    async def test_missing_container(self) -> None:
        """A missing container yields the default result."""
        page = StaticPage.from_html("<button>Play</button>")
        result = await check_focus_indicators(page, _player("#player"))
        assert result == FocusIndicatorResult()
