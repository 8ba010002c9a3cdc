""" Linker driver.

Link object files and libraries into an executable or shared library.
Object files and -l namespecs are passed to the linker in the order in
which they appear on the command line.
"""

import argparse
import platform
import sys
from .base import base_parser, LogSetup, OnceAction
from .. import __version__
from ..driver import link_main
from ..gnu import GnuLinker
from ..options import make_options, host_triple, split_arguments


banner_text = 'linkdriver {} (Python {} {}):\n  Default target: {}'.format(
    __version__, platform.python_implementation(), platform.python_version(),
    host_triple())


parser = argparse.ArgumentParser(
    formatter_class=argparse.RawDescriptionHelpFormatter,
    description=__doc__,
    parents=[base_parser],
    allow_abbrev=False,
)
parser.add_argument(
    "obj", nargs="*", metavar="object-file", help="input object files"
)
parser.add_argument(
    "-o", dest="output", action=OnceAction, metavar="filename",
    help="Output filename"
)
parser.add_argument(
    "-L", dest="search_dirs", action="append", default=[],
    metavar="searchdir",
    help="Add path searchdir to the list of paths that ld will search for "
    "archive libraries and ld control scripts.",
)
parser.add_argument(
    "-l", dest="namespecs", action="append", default=[], metavar="namespec",
    help="Add the archive or object file specified by namespec to the list "
    "of files to link.",
)
parser.add_argument(
    "--soname", action=OnceAction, metavar="name",
    help="Set internal name of shared library"
)
parser.add_argument(
    "--sysroot", action=OnceAction, metavar="directory",
    help="Use directory as the location of the sysroot",
)
parser.add_argument(
    "--shared", action="store_true", default=False,
    help="Create a shared library."
)
parser.add_argument(
    "--dynamic-linker", dest="dynamic_linker", action=OnceAction,
    metavar="program", help="Set the name of the dynamic linker."
)
parser.add_argument(
    "--wrap", dest="wraps", action="append", default=[], metavar="symbol",
    help="Use a wrap function for symbol."
)
parser.add_argument(
    "-mtriple", "-C", dest="target_triple", default=host_triple(),
    metavar="triple",
    help="Specify the target triple (default: {}). The ld program "
    "decides the actual target, see --ld.".format(host_triple()),
)
parser.add_argument(
    "--ld", dest="ld_program", default="ld", metavar="program",
    help="The GNU compatible ld program that performs the link",
)
parser.add_argument(
    "-version", action="version", version=banner_text,
    help="Display version and default target and exit"
)


def ld(args=None, linker=None):
    """ Run linker driver from command line """
    argv = sys.argv[1:] if args is None else list(args)
    # Everything after -- is an object file:
    head, tail = split_arguments(argv)
    args = parser.parse_intermixed_args(head)
    args.obj = list(args.obj) + tail
    try:
        options = make_options(args, argv)
    except ValueError as ex:
        parser.error(str(ex))

    with LogSetup(args):
        if linker is None:
            linker = GnuLinker(args.ld_program)
        link_main(options, linker)


if __name__ == "__main__":
    ld()
