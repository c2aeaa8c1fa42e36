"""Player accessibility heuristics."""

from sce.checks.accessibility.checker import check_player_accessibility
from sce.checks.accessibility.customization import check_caption_customization
from sce.checks.accessibility.focus import check_focus_indicators
from sce.checks.accessibility.keyboard import check_keyboard_navigation
from sce.checks.accessibility.naming import check_aria_labels, resolve_accessible_name

__all__ = [
    "check_aria_labels",
    "check_caption_customization",
    "check_focus_indicators",
    "check_keyboard_navigation",
    "check_player_accessibility",
    "resolve_accessible_name",
]
