"""Write the generated navigator into a Java source tree."""

import logging
from pathlib import Path

from .java import NAVIGATOR_CLASS

logger = logging.getLogger(__name__)


def output_path(output_dir: str | Path, package: str) -> Path:
    """Location of Navigator.java below a source root."""
    return Path(output_dir).joinpath(*package.split("."), f"{NAVIGATOR_CLASS}.java")


def write_navigator(source: str, output_dir: str | Path, package: str) -> Path | None:
    """Write the navigator source.

    Write failures are logged, not raised; None is returned instead of the path.
    """
    path = output_path(output_dir, package)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(source)
    except OSError:
        logger.exception("Could not write %s", path)
        return None

    logger.debug("Wrote %s", path)
    return path
