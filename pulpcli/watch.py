"""Re-run a callback whenever the project sources change (`--watch`)."""

from pathlib import Path
from typing import Callable, Iterable

from watchfiles import DefaultFilter, watch as watch_changes

from .faults import CommandError
from .log import get_logger

logger = get_logger(__name__)


class SourcesFilter(DefaultFilter):
    """Only PureScript sources and their foreign JavaScript modules."""

    extensions = (".purs", ".js")

    def __call__(self, change, path: str) -> bool:
        return super().__call__(change, path) and path.endswith(self.extensions)


def watch(directories: Iterable[Path], callback: Callable[[], None], *, debounce: int = 300, stop_event=None) -> None:
    """Run `callback` once, then again after every batch of source changes.

    Errors are the callback's business; this loop only ends on interrupt or
    when `stop_event` is set.
    """
    existing = sorted({str(directory) for directory in directories if Path(directory).is_dir()})
    if not existing:
        raise CommandError("No source directories to watch.")

    callback()
    logger.info("Watching " + ", ".join(existing))
    for changes in watch_changes(*existing, watch_filter=SourcesFilter(), debounce=debounce, stop_event=stop_event):
        for _, path in sorted(changes):
            logger.debug(f"Changed: {path}")
        logger.info("Source tree changed; running again.")
        callback()


__all__ = (
    "SourcesFilter",
    "watch",
)
