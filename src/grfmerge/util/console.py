#!/usr/bin/env python3


import datetime

import colorama


class Console:
    """Common terminal logging functions"""

    @staticmethod
    def init():
        """Initialise console logging"""
        colorama.init(autoreset=True)

    @staticmethod
    def log_error(message):
        """Log error message to terminal"""
        Console.log(datetime.datetime.now(), colorama.Fore.RED, message)

    @staticmethod
    def log_warning(message):
        """Log warning message to terminal"""
        Console.log(datetime.datetime.now(), colorama.Fore.YELLOW, message)

    @staticmethod
    def log_info(message):
        """Log info message to terminal"""
        Console.log(datetime.datetime.now(), colorama.Fore.MAGENTA, message)

    @staticmethod
    def log(timestamp: datetime.datetime, colour, string: str):
        """Log colourised string to terminal"""
        ts = timestamp.strftime("%H:%M:%S.%f")[:-3]
        print(f"[{ts}]{colour} {string}")

    @staticmethod
    def ask(question: str) -> bool:
        """Ask a yes/no question on the terminal"""
        try:
            answer = input(f"{colorama.Fore.CYAN}{question} [Y/N] {colorama.Style.RESET_ALL}")
        except EOFError:
            return False
        return answer.strip().lower().startswith("y")
