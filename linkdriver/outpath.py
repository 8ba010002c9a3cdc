""" Determine where the linked output goes. """

import logging
import os
from .common import NoInputError, PathResolutionError


DEFAULT_OUTPUT_PATH = 'a.out'

logger = logging.getLogger('linkdriver')


def resolve_output_path(output, object_files):
    """ Determine the output filename.

    An explicit output is used as is. Without one, several inputs link to
    ``a.out`` in the current directory, and a single input links to
    ``a.out`` next to that input.

    Args:
        output: the value given to ``-o``, or None
        object_files: the input object file paths

    Returns:
        The output path
    """
    if output:
        return output

    if len(object_files) > 1:
        logger.warning(
            'No output file specified with multiple inputs, using %s',
            DEFAULT_OUTPUT_PATH)
        return DEFAULT_OUTPUT_PATH

    if not object_files:
        raise NoInputError(
            'No input files given and no output file specified!')

    input_path = object_files[0]
    try:
        absolute_path = os.path.abspath(input_path)
    except OSError as ex:
        raise PathResolutionError(
            "Failed to determine the absolute path of `{}'! (detail: {})"
            .format(input_path, ex)) from ex

    directory = os.path.dirname(absolute_path)
    output_path = os.path.join(directory, DEFAULT_OUTPUT_PATH)
    logger.debug('Derived output path %s from %s', output_path, input_path)
    return output_path
