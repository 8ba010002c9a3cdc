""" A command line driver for native linkers implemented in pure Python.

The driver decides which inputs are handed to a link engine and in which
order, and reports engine failures.

Example usage:

>>> from linkdriver.sequencer import InputSequence
>>> from linkdriver.options import PositionedArg
>>> seq = InputSequence([PositionedArg('a.o', 2)], [PositionedArg('m', 1)])
>>> [ref.position for ref in seq]
[1, 2]

"""

# Define version here. Used in setup script and version banner:
__version_info__ = (0, 1, 0)
__version__ = '.'.join(map(str, __version_info__))
