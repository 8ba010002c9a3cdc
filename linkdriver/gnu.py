""" Link engine that delegates to a GNU compatible ``ld`` program.

The engine collects the configuration and the inputs in order and runs
the linker program once, when link is requested.
"""

import logging
import os
import re
import subprocess
from .engine import Linker, ErrorCode
from .options import host_triple


# Used when the ld program does not list its own search directories:
default_search_dirs = ('=/usr/local/lib', '=/lib', '=/usr/lib')

search_dir_pattern = re.compile(r'SEARCH_DIR\("([^"]*)"\)')


class GnuLinker(Linker):
    """ Links by running a GNU ld compatible program """
    logger = logging.getLogger('ld')

    def __init__(self, program='ld', use_default_dirs=True):
        super().__init__()
        self.program = program
        self.use_default_dirs = use_default_dirs
        self.system_dirs = ()
        self.inputs = []

    def __repr__(self):
        return 'GnuLinker({})'.format(self.program)

    def do_config(self, configuration):
        if configuration.target_triple != host_triple():
            self.logger.warning(
                'Target %s requested, the target is decided by %s',
                configuration.target_triple, self.program)

        if self.use_default_dirs:
            system_dirs = self.query_search_dirs()
            if system_dirs is None:
                return ErrorCode.DELEGATE_LD_INFO
            self.system_dirs = system_dirs
        return ErrorCode.SUCCESS

    def query_search_dirs(self):
        """ Ask the ld program for its built in library search path.

        Returns None when the program cannot be run.
        """
        cmd = [self.program, '--verbose']
        try:
            result = subprocess.run(
                cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE,
                universal_newlines=True)
        except OSError as ex:
            self.logger.error('Cannot run %s: %s', self.program, ex)
            return

        if result.returncode != 0:
            self.logger.error(
                '%s --verbose exited with status %s',
                self.program, result.returncode)
            return

        dirs = tuple(search_dir_pattern.findall(result.stdout))
        if not dirs:
            self.logger.debug(
                '%s lists no search directories, using defaults',
                self.program)
            dirs = default_search_dirs
        self.logger.debug('System search directories: %s', dirs)
        return dirs

    def do_set_output(self, path):
        # Create the output right away so that an unwritable location is
        # reported before any input is read.
        try:
            with open(path, 'wb'):
                pass
        except OSError as ex:
            self.logger.error('Cannot create %s: %s', path, ex)
            return ErrorCode.OPEN_OUTPUT
        return ErrorCode.SUCCESS

    def do_add_object(self, path):
        if not os.path.isfile(path):
            return ErrorCode.OPEN_OBJECT_FILE
        self.inputs.append(path)
        return ErrorCode.SUCCESS

    def do_add_namespec(self, name):
        path = self.find_namespec(name)
        if path is None:
            return ErrorCode.FIND_NAME_SPEC
        self.logger.debug('Namespec -l%s resolved to %s', name, path)
        self.inputs.append(path)
        return ErrorCode.SUCCESS

    def search_dirs(self):
        """ The library search directories, with the sysroot applied """
        dirs = list(self.configuration.search_dirs)
        dirs.extend(self.system_dirs)

        sysroot = self.configuration.sysroot or ''
        for directory in dirs:
            if directory.startswith('='):
                directory = sysroot + directory[1:]
            yield directory

    def find_namespec(self, name):
        """ Find the library file for a namespec.

        ``:filename`` searches for exactly that file. Otherwise a shared
        library is preferred over an archive within each directory.
        """
        if name.startswith(':'):
            candidates = [name[1:]]
        else:
            candidates = ['lib{}.so'.format(name), 'lib{}.a'.format(name)]

        for directory in self.search_dirs():
            for candidate in candidates:
                path = os.path.join(directory, candidate)
                if os.path.isfile(path):
                    return path

    def command(self):
        """ Create the ld command line for the collected link """
        config = self.configuration
        cmd = [self.program, '-o', self.output]
        if config.shared:
            cmd.append('-shared')
            cmd.extend(['-soname', config.soname])
        if config.sysroot:
            cmd.append('--sysroot={}'.format(config.sysroot))
        if config.dynamic_linker:
            cmd.extend(['--dynamic-linker', config.dynamic_linker])
        for symbol in config.wraps:
            cmd.extend(['--wrap', symbol])
        for directory in config.search_dirs:
            cmd.append('-L{}'.format(directory))
        cmd.extend(self.inputs)
        return cmd

    def do_link(self):
        cmd = self.command()
        self.logger.debug('Running %s', ' '.join(cmd))
        try:
            result = subprocess.run(
                cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE,
                universal_newlines=True)
        except OSError as ex:
            self.logger.error('Cannot run %s: %s', self.program, ex)
            return ErrorCode.LINK_FAILED

        level = logging.ERROR if result.returncode else logging.WARNING
        for line in result.stderr.splitlines():
            self.logger.log(level, '%s', line)

        if result.returncode != 0:
            self.logger.error(
                '%s exited with status %s', self.program, result.returncode)
            return ErrorCode.LINK_FAILED
        return ErrorCode.SUCCESS
