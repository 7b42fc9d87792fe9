"""
User preference storage for NewsLive.
"""
import logging
from pathlib import Path
from typing import Optional, Union

from newslive.config import dump_mapping, load_mapping
from newslive.core.article import UserPreferences

# Configure logging
logger = logging.getLogger(__name__)


class PreferencesStore:
    """
    Reads and writes the user's reading preferences from a YAML or JSON file.
    """
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def get_user_preferences(self) -> UserPreferences:
        """
        Read the current preferences snapshot.

        Returns:
            UserPreferences, empty if the file does not exist yet
        """
        data = load_mapping(self.path)
        if data is None:
            logger.debug(f"No preferences file at {self.path}, using empty preferences")
            return UserPreferences()

        return UserPreferences(
            preferred_category=_optional_str(data.get('preferred_category')),
            preferred_keywords=_optional_str(data.get('preferred_keywords')),
        )

    def save_user_preferences(self, preferences: UserPreferences) -> None:
        dump_mapping(self.path, {
            'preferred_category': preferences.preferred_category,
            'preferred_keywords': preferences.preferred_keywords,
        })
        logger.info(f"Saved preferences to {self.path}")


def _optional_str(value) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)
