#!/usr/bin/env python3


class GrfMergeError(Exception):
    """Generic fatal merge exception"""


class FormatError(GrfMergeError):
    """Patch stream or target file is malformed or truncated"""


class CorruptionError(GrfMergeError):
    """Record contents are inconsistent with their framing"""


class InstallError(GrfMergeError):
    """Filesystem operation required to install the output failed"""


class RenameConflict(InstallError):
    """Target could not be renamed to its backup"""


class InstallAborted(RenameConflict):
    """User refused to delete a target that could not be backed up"""


class SkipPatchSet(Exception):
    """Patch set can not be applied, but the run continues"""


class FileAccessError(SkipPatchSet):
    """Target file could not be opened"""


class UserDeclined(SkipPatchSet):
    """User refused to apply the patch set to the requested target"""
