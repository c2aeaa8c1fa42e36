"""Player technology detection."""

from sce.detection.detector import (
    detect_media_elements,
    detect_players,
    find_native_container,
    run_probe,
)
from sce.detection.probes import SDK_PROBES, PlayerProbe

__all__ = [
    "SDK_PROBES",
    "PlayerProbe",
    "detect_media_elements",
    "detect_players",
    "find_native_container",
    "run_probe",
]
