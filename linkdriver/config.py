""" Linker configuration. """

from collections import namedtuple


LinkerConfiguration = namedtuple(
    'LinkerConfiguration', [
        'soname', 'sysroot', 'dynamic_linker', 'wraps', 'search_dirs',
        'shared', 'target_triple'])


def build_config(options, output_path):
    """ Create the linker configuration from the options.

    The soname defaults to the output path when not given.
    """
    return LinkerConfiguration(
        soname=options.soname or output_path,
        sysroot=options.sysroot or None,
        dynamic_linker=options.dynamic_linker or None,
        wraps=tuple(options.wraps),
        search_dirs=tuple(options.search_dirs),
        shared=bool(options.shared),
        target_triple=options.target_triple,
    )
