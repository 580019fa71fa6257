# cricphase/core/config.py
# Settings come from environment variables with local-development defaults
import os
from typing import List

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./cricphase.db")

# Over numbers where the next match phase begins (0-based overs).
# "6,15" gives Powerplay 0-5, Middle 6-14, Death 15 onwards.
PHASE_BOUNDARIES = os.getenv("PHASE_BOUNDARIES", "6,15")
PHASE_NAMES = os.getenv("PHASE_NAMES", "Powerplay,Middle,Death")

DISMISSAL_SAMPLE_SIZE = int(os.getenv("DISMISSAL_SAMPLE_SIZE", "20"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")


def split_setting(value: str) -> List[str]:
    """Split a comma separated setting, ignoring blanks"""
    return [item.strip() for item in value.split(",") if item.strip()]


def phase_boundaries() -> List[int]:
    return [int(item) for item in split_setting(PHASE_BOUNDARIES)]


def phase_names() -> List[str]:
    return split_setting(PHASE_NAMES)


def cors_origins() -> List[str]:
    return split_setting(CORS_ORIGINS)
