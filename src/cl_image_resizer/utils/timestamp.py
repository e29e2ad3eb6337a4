import os
import sys
from pathlib import Path

from loguru import logger


def creation_time(stat: os.stat_result) -> float:
    """Best available creation time of a file, in seconds since the epoch."""
    birthtime = getattr(stat, "st_birthtime", None)
    if birthtime is not None:
        return birthtime
    return stat.st_ctime if sys.platform == "win32" else stat.st_mtime


def copy_file_times(source_stat: os.stat_result, target: str | Path) -> None:
    """Give ``target`` the access, modification and (where settable) creation
    times recorded in ``source_stat``.

    ``source_stat`` must be taken before the source is opened, otherwise the
    access time already reflects the read.
    """
    target = Path(target)
    os.utime(target, ns=(source_stat.st_atime_ns, source_stat.st_mtime_ns))

    if sys.platform == "win32":
        from win32_setctime import setctime

        setctime(target, creation_time(source_stat))
    else:
        logger.debug(f"Creation time is not settable on {sys.platform}: {target.name}")
