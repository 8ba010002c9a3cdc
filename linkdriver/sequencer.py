""" Restore the command line order of link inputs.

Object files and ``-l`` namespecs are collected into separate lists by the
option parser. Symbol resolution depends on the order in which the inputs
were given, so the two lists are merged back by original position.
"""

from collections import namedtuple


ObjectFile = namedtuple('ObjectFile', ['path', 'position'])
NameSpec = namedtuple('NameSpec', ['name', 'position'])


def merge_inputs(object_files, namespecs):
    """ Merge two position sorted lists into one sequence of input refs.

    Both arguments are sequences of ``(value, position)`` pairs with
    positions starting at 1. An exhausted list counts as position 0. On
    equal positions the object file goes first.
    """
    file_index = 0
    lib_index = 0
    while True:
        if file_index < len(object_files):
            file_pos = object_files[file_index][1]
        else:
            file_pos = 0

        if lib_index < len(namespecs):
            lib_pos = namespecs[lib_index][1]
        else:
            lib_pos = 0

        if file_pos != 0 and (lib_pos == 0 or file_pos <= lib_pos):
            yield ObjectFile(object_files[file_index][0], file_pos)
            file_index += 1
        elif lib_pos != 0:
            yield NameSpec(namespecs[lib_index][0], lib_pos)
            lib_index += 1
        else:
            break


class InputSequence:
    """ The link inputs in command line order.

    Every iteration starts a new merge over the same inputs.
    """
    def __init__(self, object_files, namespecs):
        self.object_files = tuple(object_files)
        self.namespecs = tuple(namespecs)

    def __iter__(self):
        return merge_inputs(self.object_files, self.namespecs)

    def __len__(self):
        return len(self.object_files) + len(self.namespecs)

    def __repr__(self):
        return 'InputSequence({} objects, {} namespecs)'.format(
            len(self.object_files), len(self.namespecs))
