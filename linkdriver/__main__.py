""" Main entry point """

from .cli.ld import ld


if __name__ == "__main__":
    ld()
