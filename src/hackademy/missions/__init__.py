"""Mission content and progression around the edit session."""

from .levels import LEVEL_CONFIGS, STAGE_ORDER, GameStage, LevelConfig
from .progress import FeedbackTicket, MissionProgress, MissionTracker

__all__ = [
    "GameStage",
    "LevelConfig",
    "LEVEL_CONFIGS",
    "STAGE_ORDER",
    "FeedbackTicket",
    "MissionProgress",
    "MissionTracker",
]
