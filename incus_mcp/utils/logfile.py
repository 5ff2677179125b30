"""Log file preparation."""

import time
from pathlib import Path


def prepare_log_file(path: Path, truncate: bool, max_age_hours: float) -> bool:
    """Create the log file's directory and age out stale content.

    When ``truncate`` is set, an existing file last written more than
    ``max_age_hours`` ago is emptied.

    Args:
        path: Log file path
        truncate: Whether stale files may be truncated
        max_age_hours: Age after which the file counts as stale

    Returns:
        True if the file was truncated.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if not truncate or not path.exists():
        return False

    age_seconds = time.time() - path.stat().st_mtime
    if age_seconds <= max_age_hours * 3600:
        return False

    path.write_text("")
    return True
