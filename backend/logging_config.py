import datetime
import logging
import sys

from settings import LOG_LEVEL


_LOGGING_CONFIGURED = False


class IsoTimeFormatter(logging.Formatter):
    """Formatter that renders timestamps as local ISO-8601 with milliseconds."""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        dt = datetime.datetime.fromtimestamp(record.created).astimezone()
        if datefmt:
            return dt.strftime(datefmt)
        return dt.isoformat(timespec="milliseconds")


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger once; later calls only adjust the level."""
    global _LOGGING_CONFIGURED

    root = logging.getLogger()
    root.setLevel((level or LOG_LEVEL).upper())
    if _LOGGING_CONFIGURED:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        IsoTimeFormatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
    )
    root.addHandler(handler)

    # httpx logs every request at INFO; keep provider traffic quiet by default.
    logging.getLogger("httpx").setLevel(logging.WARNING)

    _LOGGING_CONFIGURED = True
