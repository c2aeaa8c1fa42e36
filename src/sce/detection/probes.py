"""Probe table for known player SDKs.

Each probe is a plain data record; detect_players() iterates the table
uniformly. Order matters: the first matching probe becomes the primary
player.
"""

from dataclasses import dataclass

from sce.domain import PlayerSDK


@dataclass(frozen=True)
class PlayerProbe:
    """How to recognize one player SDK on a page.

    Attributes:
        sdk: Technology identifier reported on a match.
        global_expression: Expression that is truthy when the SDK's global
            is defined, or None if the SDK exposes no global.
        marker_selector: Selector for DOM evidence of the SDK (its script
            tag or container markup), or None.
        version_expression: Expression returning the SDK version, or None.
        container_selector: Locator for the player's container element.
    """

    sdk: PlayerSDK
    global_expression: str | None
    marker_selector: str | None
    version_expression: str | None
    container_selector: str


def _global_defined(name: str) -> str:
    return f"typeof window.{name} !== 'undefined'"


def _global_path(path: str) -> str:
    """Build a guarded property lookup such as 'a && a.b && a.b.c'."""
    parts = path.split(".")
    guards = [f"window.{'.'.join(parts[: i + 1])}" for i in range(len(parts))]
    return f"({_global_defined(parts[0])} && {' && '.join(guards)}) || null"


_BITMOVIN_MARKUP = '[class*="bitmovin"], bitmovin-player, [id*="bitmovin"]'

SDK_PROBES: tuple[PlayerProbe, ...] = (
    PlayerProbe(
        sdk=PlayerSDK.HLS_JS,
        global_expression=_global_defined("Hls"),
        marker_selector='script[src*="hls.js"], script[src*="hls.min.js"]',
        version_expression=_global_path("Hls.version"),
        container_selector="video",
    ),
    PlayerProbe(
        sdk=PlayerSDK.DASH_JS,
        global_expression=_global_defined("dashjs"),
        marker_selector='script[src*="dash.all"], script[src*="dash.js"]',
        version_expression=_global_path("dashjs.Version"),
        container_selector="video",
    ),
    PlayerProbe(
        sdk=PlayerSDK.SHAKA,
        global_expression=_global_defined("shaka"),
        marker_selector='script[src*="shaka-player"]',
        version_expression=_global_path("shaka.Player.version"),
        container_selector="video",
    ),
    PlayerProbe(
        sdk=PlayerSDK.VIDEOJS,
        global_expression=_global_defined("videojs"),
        marker_selector=".video-js",
        version_expression=_global_path("videojs.VERSION"),
        container_selector=".video-js",
    ),
    PlayerProbe(
        sdk=PlayerSDK.JWPLAYER,
        global_expression=_global_defined("jwplayer"),
        marker_selector=".jwplayer",
        version_expression=_global_path("jwplayer.version"),
        container_selector=".jwplayer",
    ),
    PlayerProbe(
        sdk=PlayerSDK.BITMOVIN,
        global_expression=_global_defined("bitmovin"),
        marker_selector=_BITMOVIN_MARKUP,
        version_expression=_global_path("bitmovin.player.Player.version"),
        container_selector=_BITMOVIN_MARKUP,
    ),
    PlayerProbe(
        sdk=PlayerSDK.PLYR,
        global_expression=_global_defined("Plyr"),
        marker_selector=".plyr",
        version_expression=_global_path("Plyr.version"),
        container_selector=".plyr",
    ),
    PlayerProbe(
        sdk=PlayerSDK.EYEVINN,
        global_expression=None,
        marker_selector="eyevinn-video",
        version_expression=None,
        container_selector="eyevinn-video",
    ),
)
