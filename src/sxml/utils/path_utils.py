# src/sxml/utils/path_utils.py
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class PathUtils:
    """
    A central utility for reliably retrieving package and user paths.
    """

    @staticmethod
    def get_package_root() -> Path:
        """Returns the directory of the installed 'sxml' package."""
        return Path(__file__).resolve().parent.parent

    @staticmethod
    def get_settings_file() -> Path:
        """Returns the path to the bundled settings.json."""
        return PathUtils.get_package_root() / "settings.json"

    @staticmethod
    def resolve_input(path: str) -> Path:
        """
        Expands '~' and resolves a user-supplied input path.
        Raises FileNotFoundError if it does not point at a file.
        """
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_file():
            raise FileNotFoundError(f"Input file not found: {resolved}")
        return resolved
