from enum import Enum
from typing import Dict


class DisplayMode(str, Enum):
    STANDARD = "standard"
    HIGH_CONTRAST = "high-contrast"


# Read by the presentation layer only; layout and assembly never look at it
PALETTES: Dict[DisplayMode, Dict[str, str]] = {
    DisplayMode.STANDARD: {
        "background": "#1a1a1a",
        "text": "#e0e0e0",
        "accent": "#7c3aed",
        "branch": "#008000",
        "commit": "#0000ff",
        "contributor": "#4a9eff",
        "trail": "#4a5568",
    },
    DisplayMode.HIGH_CONTRAST: {
        "background": "#000000",
        "text": "#ffffff",
        "accent": "#ffff00",
        "branch": "#00ff00",
        "commit": "#4169e1",
        "contributor": "#4a9eff",
        "trail": "#ffffff",
    },
}


def palette_for(mode: DisplayMode) -> Dict[str, str]:
    return dict(PALETTES[DisplayMode(mode)])
