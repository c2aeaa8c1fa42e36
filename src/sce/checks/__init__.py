"""Evidence checkers for captions, audio description and player controls."""

from sce.checks.accessibility import check_player_accessibility
from sce.checks.audio_description import check_audio_description
from sce.checks.captions import check_captions

__all__ = [
    "check_audio_description",
    "check_captions",
    "check_player_accessibility",
]
