from enum import Enum
from typing import Dict


class ActivityType(str, Enum):
    H5P_ACTIVITY = "h5pactivity"  # Graded through the gradebook
    URL = "url"
    RESOURCE = "resource"
    PAGE = "page"
    LABEL = "label"
    BOOK = "book"
    FOLDER = "folder"

class AchievementSource(str, Enum):
    COMPLETION = "completion"
    GRADED = "graded"

class CompletionState(int, Enum):
    INCOMPLETE = 0
    COMPLETE = 1


ACHIEVEMENT_SOURCES: Dict[ActivityType, AchievementSource] = {
    ActivityType.H5P_ACTIVITY: AchievementSource.GRADED,
    ActivityType.URL: AchievementSource.COMPLETION,
    ActivityType.RESOURCE: AchievementSource.COMPLETION,
    ActivityType.PAGE: AchievementSource.COMPLETION,
    ActivityType.LABEL: AchievementSource.COMPLETION,
    ActivityType.BOOK: AchievementSource.COMPLETION,
    ActivityType.FOLDER: AchievementSource.COMPLETION,
}
