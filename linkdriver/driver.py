""" The link driver.

Runs a link engine through its stages: configure, set the output, add the
inputs in order and link. The first failing stage ends the run.
"""

import enum
import logging
from .common import ConfigurationError, OutputSetupError, InputError
from .common import LinkError, NoInputError
from .config import build_config
from .engine import ErrorCode
from .outpath import resolve_output_path
from .sequencer import InputSequence, ObjectFile


class DriverState(enum.Enum):
    """ Driver states """
    UNCONFIGURED = 0
    CONFIGURED = 1
    OUTPUT_SET = 2
    INPUTS_LOADED = 3
    LINKED = 4
    FAILED = 99


class LinkDriver:
    """ Drives a single link with the given engine.

    A driver is used for one run only and never goes back to an earlier
    state.
    """
    logger = logging.getLogger('linkdriver')

    def __init__(self, linker):
        self.linker = linker
        self.state = DriverState.UNCONFIGURED
        self.failed_stage = None
        self.error = None

    def run(self, config, output_path, inputs):
        """ Link the inputs into output_path using config.

        Raises the stage specific error on the first engine failure.
        """
        if self.state != DriverState.UNCONFIGURED:
            raise RuntimeError(
                'Link driver cannot run in state {}'.format(self.state.name))
        self.configure(config)
        self.set_output(output_path)
        self.add_inputs(inputs)
        self.link()

    def configure(self, config):
        self.logger.debug('Configuring the linker')
        code = self.linker.config(config)
        if code != ErrorCode.SUCCESS:
            detail = self.linker.get_error_string(code)
            self.fail(ConfigurationError(
                'Failed to configure the linker! (detail: {})'.format(
                    detail), code, detail))
        self.state = DriverState.CONFIGURED

    def set_output(self, output_path):
        # The engine requires the output before any input is added.
        self.logger.debug('Setting output to %s', output_path)
        code = self.linker.set_output(output_path)
        if code != ErrorCode.SUCCESS:
            detail = self.linker.get_error_string(code)
            self.fail(OutputSetupError(
                'Failed to open the output file! (detail: {}: {})'.format(
                    output_path, detail), code, detail))
        self.state = DriverState.OUTPUT_SET

    def add_inputs(self, inputs):
        for ref in inputs:
            if isinstance(ref, ObjectFile):
                self.logger.debug('Adding object file %s', ref.path)
                code = self.linker.add_object(ref.path)
                what, value = 'input file', ref.path
            else:
                self.logger.debug('Adding namespec -l%s', ref.name)
                code = self.linker.add_namespec(ref.name)
                what, value = 'namespec', ref.name

            if code != ErrorCode.SUCCESS:
                detail = self.linker.get_error_string(code)
                self.fail(InputError(
                    'Failed to open the {}! (detail: {}: {})'.format(
                        what, value, detail), code, detail, ref))
        self.state = DriverState.INPUTS_LOADED

    def link(self):
        self.logger.debug('Linking')
        code = self.linker.link()
        if code != ErrorCode.SUCCESS:
            detail = self.linker.get_error_string(code)
            self.fail(LinkError(
                'Failed to link! (detail: {})'.format(detail), code, detail))
        self.state = DriverState.LINKED

    def fail(self, error):
        self.state = DriverState.FAILED
        self.failed_stage = error.stage
        self.error = error
        raise error


def link_main(options, linker):
    """ Perform a complete link as described by the option model.

    Returns the path of the output file.
    """
    object_paths = [arg.value for arg in options.object_files]
    output_path = resolve_output_path(options.output, object_paths)
    config = build_config(options, output_path)
    inputs = InputSequence(options.object_files, options.namespecs)
    if not len(inputs):
        raise NoInputError('No input files!')
    driver = LinkDriver(linker)
    driver.run(config, output_path, inputs)
    return output_path
