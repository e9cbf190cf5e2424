#!/usr/bin/env python3

"""Replace a target with its merged output

The steps are ordered so that a crash at any point leaves either the original
target, the backup plus the merged output, or the new target on disk.
"""

import os
import pathlib

from grfmerge.common import BACKUP_EXTENSION
from grfmerge.exceptions import InstallAborted, InstallError
from grfmerge.session import Session
from grfmerge.util.console import Console


def backup_path(target: pathlib.Path) -> pathlib.Path:
    """Backup location of `target`"""
    return target.with_suffix(BACKUP_EXTENSION)


class AtomicReplacer:
    """Install merged output files over their targets"""

    def __init__(self, session: Session):
        self._session = session

    def install(self, output: pathlib.Path, target: pathlib.Path) -> None:
        backup = backup_path(target)
        delete_target = True

        # A backup from a previous run is the original file, never overwrite it
        if not backup.exists():
            Console.log_info(f"Renaming {target} to {backup}")
            try:
                os.rename(target, backup)
                delete_target = False
            except OSError as e:
                Console.log_error(f"Error while renaming: {e.strerror}")
                if not self._session.confirm(f"Shall I delete {target} instead?"):
                    raise InstallAborted(f"Could not back up {target}, aborted") from e

        if delete_target:
            Console.log_info(f"Deleting {target}")
            try:
                os.remove(target)
            except OSError as e:
                raise InstallError(f"Error while deleting {target}: {e.strerror}") from e

        Console.log_info(f"Renaming {output} to {target}")
        try:
            os.rename(output, target)
        except OSError as e:
            raise InstallError(f"Error while renaming {output} to {target}: {e.strerror}") from e

        Console.log_info("All done!")
