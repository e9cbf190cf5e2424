#!/usr/bin/env python3
# PYTHON_ARGCOMPLETE_OK

"""GRFMerge main module"""

import importlib.metadata
import pathlib
import sys

import argcomplete
import tabulate

from grfmerge.driver import PatchSetDriver
from grfmerge.exceptions import GrfMergeError
from grfmerge.merge import MergeResult
from grfmerge.session import Session
from grfmerge.sfx import locate_payload, resolve_image_path, self_image_path
from grfmerge.util.argparse import UsageErrorParser
from grfmerge.util.console import Console
from grfmerge.util.progress import RichProgress
from grfmerge.util.ranges import coalesce_runs, format_runs


def version() -> str:
    try:
        return importlib.metadata.version("grfmerge")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


class GrfMergeApp:
    """The grfmerge 'application' object"""

    def __init__(self):
        # A self-extracting build carries its own GRD, all arguments are GRF files
        self.payload = self._own_payload()
        self.parser = UsageErrorParser(
            "grfmerge",
            description="Change sprites in GRF files to the new ones from a GRD file. "
            "If no GRF file is specified, the one the GRD file was generated from is modified.",
        )
        self._add_arguments(self.parser)
        # Handle CLI tab completion
        argcomplete.autocomplete(self.parser)

    @staticmethod
    def _own_payload() -> tuple[pathlib.Path, int] | None:
        """GRD stream appended to the running executable, if any"""
        image = self_image_path()
        if image is None:
            return None
        location = locate_payload(image)
        if not location.is_wrapper:
            return None
        return image, location.offset

    @property
    def is_sfx(self) -> bool:
        return self.payload is not None

    def _add_arguments(self, parser: UsageErrorParser):
        parser.add_argument(
            "--list",
            "-l",
            action="store_true",
            help="Only show which sprites the GRD file contains, don't integrate them",
        )
        parser.add_argument("--yes", "-y", action="store_true", help="Answer 'y' to all questions")
        parser.add_argument("--version", "-v", action="store_true", help="Show the version and exit")
        if not self.is_sfx:
            parser.add_argument("grd", nargs="?", help="GRD file to apply")
        parser.add_argument("grf", nargs="*", help="GRF file to modify, one per patch set in the GRD file")

    def run(self, argv) -> int:
        """Run the merge, returning the process exit status"""
        print(f"GRFMerge version {version()}")
        args = self.parser.parse_args(argv)
        if args.version:
            return 0

        if not self.is_sfx and args.grd is None:
            self.parser.error("No GRD file specified!")

        session = Session(
            dry_run=args.list,
            always_yes=args.yes,
            progress=RichProgress(),
        )
        try:
            if self.payload is not None:
                grd, offset = self.payload
            else:
                # The GRD file itself may be a self-extracting executable
                grd = resolve_image_path(args.grd) or args.grd
                offset = locate_payload(grd).offset
            results = PatchSetDriver(session).run(grd, offset, args.grf)
        except GrfMergeError as e:
            Console.log_error(str(e))
            return 2
        except OSError as e:
            Console.log_error(f"{e.filename}: {e.strerror}")
            return 2

        self.summary(results)
        return 0

    @staticmethod
    def summary(results: list[MergeResult]):
        table = []
        for result in results:
            table.append(
                [
                    result.name,
                    result.target or "",
                    result.status.value,
                    format_runs(coalesce_runs(result.indices)),
                ]
            )
        print(tabulate.tabulate(table, headers=["GRD", "GRF", "Result", "Sprites"], tablefmt="simple"))


def main(argv=None):
    """Create the GrfMergeApp instance and let it run"""
    Console.init()
    try:
        app = GrfMergeApp()
    except GrfMergeError as e:
        Console.log_error(str(e))
        sys.exit(2)
    try:
        status = app.run(sys.argv[1:] if argv is None else argv)
    except KeyboardInterrupt:
        status = 2
    sys.exit(status)


if __name__ == "__main__":
    main()
