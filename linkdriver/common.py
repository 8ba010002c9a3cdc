"""
   Error handling routines
   Diagnostic utils
"""


logformat = '%(asctime)s | %(levelname)8s | %(name)10.10s | %(message)s'


class LinkDriverError(Exception):
    """ Base class of all fatal driver errors.

    Each subclass names the pipeline stage it belongs to and the process
    exit code used when it ends a run.
    """
    stage = 'driver'
    exit_code = 1

    def __init__(self, msg):
        super().__init__(msg)
        self.msg = msg

    def __repr__(self):
        return '"{}"'.format(self.msg)

    def print(self, file=None):
        """ Print the error as a single diagnostic line """
        print(self.msg, file=file)


class PathResolutionError(LinkDriverError):
    """ The output path could not be derived """
    stage = 'output-path'
    exit_code = 3


class NoInputError(LinkDriverError):
    """ Nothing to link and nothing to derive an output path from """
    stage = 'output-path'
    exit_code = 4


class EngineError(LinkDriverError):
    """ The link engine returned a failure code """
    def __init__(self, msg, code, detail):
        super().__init__(msg)
        self.code = code
        self.detail = detail


class ConfigurationError(EngineError):
    stage = 'configure'
    exit_code = 5


class OutputSetupError(EngineError):
    stage = 'output'
    exit_code = 6


class InputError(EngineError):
    """ The engine rejected an object file or namespec """
    stage = 'input'
    exit_code = 7

    def __init__(self, msg, code, detail, ref):
        super().__init__(msg, code, detail)
        self.ref = ref


class LinkError(EngineError):
    stage = 'link'
    exit_code = 8
