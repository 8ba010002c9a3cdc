""" The link options given on the command line.

The order of object files and ``-l`` namespecs on the command line decides
the link order, so both lists keep the position of each token in the
argument vector.
"""

import platform
import re
from collections import namedtuple


PositionedArg = namedtuple('PositionedArg', ['value', 'position'])

OptionModel = namedtuple(
    'OptionModel', [
        'output', 'sysroot', 'soname', 'dynamic_linker', 'search_dirs',
        'wraps', 'object_files', 'namespecs', 'shared', 'target_triple'])


# Options that take their value as the next token when not joined:
value_options = {
    '-o', '-L', '-l', '--soname', '--sysroot', '--dynamic-linker', '--wrap',
    '-mtriple', '-C', '--ld', '--log', '--report',
}

# Single character options that can be clustered, as in ``-vlm``:
short_flags = {'v', 'V', 'h'}
short_values = {'o', 'L', 'l', 'C'}

# argparse treats these as positionals, since no option looks like a number:
negative_number = re.compile(r'^-\d+$|^-\d*\.\d+$')


def host_triple():
    """ Guess the target triple of the machine we are running on """
    machine = platform.machine().lower() or 'unknown'
    system = platform.system().lower() or 'unknown'
    if system == 'linux':
        return '{}-unknown-linux-gnu'.format(machine)
    return '{}-unknown-{}'.format(machine, system)


def scan_arguments(argv):
    """ Classify the tokens of argv the way the ld argument parser does.

    Yields ``(kind, value, position)`` tuples where kind is 'object',
    'namespec' or '--'. Option tokens and option values are skipped.
    """
    pending = None
    only_positionals = False
    for position, token in enumerate(argv, 1):
        if pending:
            option, option_position = pending
            if option == '-l':
                yield 'namespec', token, option_position
            pending = None
        elif only_positionals:
            yield 'object', token, position
        elif token == '--':
            only_positionals = True
            yield '--', token, position
        elif token == '-' or not token.startswith('-') or \
                negative_number.match(token):
            yield 'object', token, position
        elif token.split('=', 1)[0] in value_options:
            option, sep, value = token.partition('=')
            if not sep:
                pending = (option, position)
            elif option == '-l':
                yield 'namespec', value, position
        elif not token.startswith('--'):
            # A cluster of short options, possibly ending with a value:
            for index, char in enumerate(token[1:], 2):
                if char in short_flags:
                    continue
                if char in short_values:
                    value = token[index:]
                    if not value:
                        pending = ('-' + char, position)
                    elif char == 'l':
                        yield 'namespec', value, position
                break


def split_arguments(argv):
    """ Split argv at the end of options marker ``--``.

    Returns the tokens before the marker and the object files after it.
    """
    for kind, _, position in scan_arguments(argv):
        if kind == '--':
            return list(argv[:position - 1]), list(argv[position:])
    return list(argv), []


def locate_inputs(argv):
    """ Find the positions of object files and namespecs in argv.

    Positions are 1-based indices into argv, as if argv[0] were the
    program name. For ``-l name`` the position of the ``-l`` token is used.

    Returns a tuple of two lists of :class:`PositionedArg`, the object
    files and the namespecs.
    """
    object_files = []
    namespecs = []
    for kind, value, position in scan_arguments(argv):
        if kind == 'object':
            object_files.append(PositionedArg(value, position))
        elif kind == 'namespec':
            namespecs.append(PositionedArg(value, position))
    return object_files, namespecs


def _attach_positions(values, located, kind):
    if list(values) != [arg.value for arg in located]:
        raise ValueError(
            'Cannot determine the positions of the {}: {} != {}'.format(
                kind, list(values), [arg.value for arg in located]))
    return tuple(located)


def make_options(args, argv):
    """ Create the option model from parsed arguments.

    Args:
        args: the namespace produced by the ld argument parser
        argv: the argument vector the namespace was parsed from
    """
    object_files, namespecs = locate_inputs(argv)
    return OptionModel(
        output=args.output or None,
        sysroot=args.sysroot or None,
        soname=args.soname or None,
        dynamic_linker=args.dynamic_linker or None,
        search_dirs=tuple(args.search_dirs),
        wraps=tuple(args.wraps),
        object_files=_attach_positions(args.obj, object_files, 'objects'),
        namespecs=_attach_positions(args.namespecs, namespecs, 'namespecs'),
        shared=args.shared,
        target_triple=args.target_triple,
    )
