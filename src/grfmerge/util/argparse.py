#!/usr/bin/env python3

import argparse
import sys


class UsageErrorParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors with exit status 1"""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")
