""" Link engine interface.

The engine does the actual linking. The driver only configures it and
feeds it inputs, in this order:

1. config, exactly once
2. set_output, exactly once
3. add_object / add_namespec, zero or more times, interleaved
4. link, exactly once

Every call returns an :class:`ErrorCode`.
"""

import abc
import enum
import logging


class ErrorCode(enum.IntEnum):
    """ Result codes of the link engine """
    SUCCESS = 0
    DOUBLE_CONFIG = 1
    DELEGATE_LD_INFO = 2
    FIND_NAME_SPEC = 3
    OPEN_NAME_SPEC = 4
    OPEN_OBJECT_FILE = 5
    NOT_CONFIG = 6
    NOT_SET_UP_OUTPUT = 7
    OPEN_OUTPUT = 8
    READ_SECTIONS = 9
    READ_SYMBOLS = 10
    ADD_ADDITIONAL_SYMBOLS = 11
    LINK_FAILED = 12


error_strings = {
    ErrorCode.SUCCESS: 'Successfully compiled.',
    ErrorCode.DOUBLE_CONFIG: 'Configure Linker twice.',
    ErrorCode.DELEGATE_LD_INFO: 'Cannot get linker information',
    ErrorCode.FIND_NAME_SPEC: 'Cannot find -lnamespec',
    ErrorCode.OPEN_NAME_SPEC: 'Cannot open -lnamespec',
    ErrorCode.OPEN_OBJECT_FILE: 'Cannot open object file.',
    ErrorCode.NOT_CONFIG: 'Linker::config() is not called',
    ErrorCode.NOT_SET_UP_OUTPUT: 'Linker::setOutput() is not called before '
                                 'add input files',
    ErrorCode.OPEN_OUTPUT: 'Cannot open output file',
    ErrorCode.READ_SECTIONS: 'Cannot read sections',
    ErrorCode.READ_SYMBOLS: 'Cannot read symbols',
    ErrorCode.ADD_ADDITIONAL_SYMBOLS: 'Cannot add standard and target '
                                      'symbols',
    ErrorCode.LINK_FAILED: 'Linking failed',
}


def get_error_string(code):
    """ Map an error code to a human readable detail string """
    return error_strings.get(code, 'Unknown error')


class Linker(metaclass=abc.ABCMeta):
    """ Link engine interface.

    Subclasses implement the ``do_*`` hooks. The public methods check the
    call order and return an error code when it is violated.
    """
    logger = logging.getLogger('engine')

    get_error_string = staticmethod(get_error_string)

    def __init__(self):
        self.configuration = None
        self.output = None

    def config(self, configuration):
        if self.configuration is not None:
            self.logger.error('config called twice')
            return ErrorCode.DOUBLE_CONFIG
        code = self.do_config(configuration)
        if code == ErrorCode.SUCCESS:
            self.configuration = configuration
        return code

    def set_output(self, path):
        if self.configuration is None:
            self.logger.error('set_output called before config')
            return ErrorCode.NOT_CONFIG
        code = self.do_set_output(path)
        if code == ErrorCode.SUCCESS:
            self.output = path
        return code

    def add_object(self, path):
        if self.output is None:
            self.logger.error('Object %s added before set_output', path)
            return ErrorCode.NOT_SET_UP_OUTPUT
        return self.do_add_object(path)

    def add_namespec(self, name):
        if self.output is None:
            self.logger.error('Namespec -l%s added before set_output', name)
            return ErrorCode.NOT_SET_UP_OUTPUT
        return self.do_add_namespec(name)

    def link(self):
        if self.output is None:
            self.logger.error('link called before set_output')
            return ErrorCode.NOT_SET_UP_OUTPUT
        return self.do_link()

    def do_config(self, configuration):
        return ErrorCode.SUCCESS

    @abc.abstractmethod
    def do_set_output(self, path):
        raise NotImplementedError()

    @abc.abstractmethod
    def do_add_object(self, path):
        raise NotImplementedError()

    @abc.abstractmethod
    def do_add_namespec(self, name):
        raise NotImplementedError()

    @abc.abstractmethod
    def do_link(self):
        raise NotImplementedError()
