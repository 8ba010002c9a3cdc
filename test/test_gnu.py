import os
import subprocess
import tempfile
import unittest
from unittest.mock import patch

from linkdriver.config import LinkerConfiguration
from linkdriver.engine import ErrorCode
from linkdriver.gnu import GnuLinker, default_search_dirs
from linkdriver.options import host_triple


def make_config(**kwargs):
    fields = dict(
        soname='libx.so', sysroot=None, dynamic_linker=None, wraps=(),
        search_dirs=(), shared=False,
        target_triple='x86_64-unknown-linux-gnu')
    fields.update(kwargs)
    return LinkerConfiguration(**fields)


def touch(*parts):
    filename = os.path.join(*parts)
    os.makedirs(os.path.dirname(filename), exist_ok=True)
    with open(filename, 'wb'):
        pass
    return filename


class GnuLinkerTestCase(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.root = self.tmpdir.name
        self.output = os.path.join(self.root, 'out')

    def tearDown(self):
        self.tmpdir.cleanup()

    def make_linker(self, **kwargs):
        linker = GnuLinker(use_default_dirs=False)
        code = linker.config(make_config(**kwargs))
        self.assertEqual(ErrorCode.SUCCESS, code)
        self.assertEqual(ErrorCode.SUCCESS, linker.set_output(self.output))
        return linker

    def test_output_is_created(self):
        self.make_linker()
        self.assertTrue(os.path.isfile(self.output))

    def test_output_cannot_be_created(self):
        linker = GnuLinker(use_default_dirs=False)
        linker.config(make_config())
        missing = os.path.join(self.root, 'no', 'such', 'dir', 'out')
        self.assertEqual(ErrorCode.OPEN_OUTPUT, linker.set_output(missing))

    def test_missing_object(self):
        linker = self.make_linker()
        self.assertEqual(
            ErrorCode.OPEN_OBJECT_FILE,
            linker.add_object(os.path.join(self.root, 'missing.o')))

    def test_namespec_prefers_shared(self):
        libdir = os.path.join(self.root, 'lib')
        touch(libdir, 'libfoo.a')
        shared = touch(libdir, 'libfoo.so')
        linker = self.make_linker(search_dirs=(libdir,))
        self.assertEqual(shared, linker.find_namespec('foo'))

    def test_namespec_search_order(self):
        first = os.path.join(self.root, 'first')
        second = os.path.join(self.root, 'second')
        archive = touch(first, 'libfoo.a')
        touch(second, 'libfoo.so')
        linker = self.make_linker(search_dirs=(first, second))
        self.assertEqual(ErrorCode.SUCCESS, linker.add_namespec('foo'))
        self.assertEqual([archive], linker.inputs)

    def test_namespec_exact_filename(self):
        libdir = os.path.join(self.root, 'lib')
        crt = touch(libdir, 'crt1.o')
        linker = self.make_linker(search_dirs=(libdir,))
        self.assertEqual(crt, linker.find_namespec(':crt1.o'))

    def test_namespec_in_sysroot(self):
        lib = touch(self.root, 'usr', 'lib', 'libc.a')
        linker = self.make_linker(
            sysroot=self.root, search_dirs=('=/usr/lib',))
        self.assertEqual(lib, linker.find_namespec('c'))

    def test_namespec_not_found(self):
        linker = self.make_linker(search_dirs=(self.root,))
        self.assertEqual(
            ErrorCode.FIND_NAME_SPEC, linker.add_namespec('nothere'))

    def test_command(self):
        obj = touch(self.root, 'a.o')
        lib = touch(self.root, 'libm.a')
        linker = self.make_linker(
            shared=True, soname='libx.so.1', sysroot='/sr',
            dynamic_linker='/lib/ld.so', wraps=('malloc',),
            search_dirs=(self.root,))
        linker.add_namespec('m')
        linker.add_object(obj)
        self.assertEqual([
            'ld', '-o', self.output, '-shared', '-soname', 'libx.so.1',
            '--sysroot=/sr', '--dynamic-linker', '/lib/ld.so',
            '--wrap', 'malloc', '-L' + self.root, lib, obj],
            linker.command())

    def test_link(self):
        obj = touch(self.root, 'a.o')
        linker = self.make_linker()
        linker.add_object(obj)
        done = subprocess.CompletedProcess([], 0, stdout='', stderr='')
        with patch('linkdriver.gnu.subprocess.run', return_value=done) as run:
            self.assertEqual(ErrorCode.SUCCESS, linker.link())
        self.assertEqual(
            ['ld', '-o', self.output, obj], run.call_args[0][0])

    def test_link_fails(self):
        linker = self.make_linker()
        failed = subprocess.CompletedProcess(
            [], 1, stdout='', stderr='undefined reference to `main\'')
        with patch('linkdriver.gnu.subprocess.run', return_value=failed):
            with self.assertLogs('ld', level='ERROR') as cm:
                self.assertEqual(ErrorCode.LINK_FAILED, linker.link())
        self.assertIn('undefined reference', cm.output[0])

    def test_program_missing(self):
        linker = self.make_linker()
        with patch(
                'linkdriver.gnu.subprocess.run',
                side_effect=FileNotFoundError('ld')):
            with self.assertLogs('ld', level='ERROR'):
                self.assertEqual(ErrorCode.LINK_FAILED, linker.link())



LD_VERBOSE = """GNU ld (GNU Binutils) 2.42
  Supported emulations:
   elf_x86_64
using internal linker script:
==================================================
OUTPUT_FORMAT("elf64-x86-64", "elf64-x86-64", "elf64-x86-64")
SEARCH_DIR("=/usr/local/lib/x86_64-linux-gnu"); SEARCH_DIR("=/lib/x86_64-linux-gnu"); SEARCH_DIR("=/usr/lib/x86_64-linux-gnu");
"""


class SystemSearchDirsTestCase(unittest.TestCase):
    """ The ld program tells where its libraries are """
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.root = self.tmpdir.name

    def tearDown(self):
        self.tmpdir.cleanup()

    def configure(self, result=None, side_effect=None, **kwargs):
        linker = GnuLinker()
        with patch(
                'linkdriver.gnu.subprocess.run', return_value=result,
                side_effect=side_effect) as run:
            code = linker.config(make_config(**kwargs))
        return linker, code, run

    def test_multiarch_dirs(self):
        libc = touch(self.root, 'usr', 'lib', 'x86_64-linux-gnu', 'libc.so')
        verbose = subprocess.CompletedProcess(
            [], 0, stdout=LD_VERBOSE, stderr='')
        linker, code, run = self.configure(verbose, sysroot=self.root)
        self.assertEqual(ErrorCode.SUCCESS, code)
        self.assertEqual(['ld', '--verbose'], run.call_args[0][0])
        self.assertEqual(
            ('=/usr/local/lib/x86_64-linux-gnu', '=/lib/x86_64-linux-gnu',
             '=/usr/lib/x86_64-linux-gnu'),
            linker.system_dirs)
        self.assertEqual(libc, linker.find_namespec('c'))

    def test_user_dirs_first(self):
        user = touch(self.root, 'mine', 'libc.a')
        touch(self.root, 'usr', 'lib', 'x86_64-linux-gnu', 'libc.so')
        verbose = subprocess.CompletedProcess(
            [], 0, stdout=LD_VERBOSE, stderr='')
        linker, _, _ = self.configure(
            verbose, sysroot=self.root,
            search_dirs=(os.path.join(self.root, 'mine'),))
        self.assertEqual(user, linker.find_namespec('c'))

    def test_no_search_dirs_listed(self):
        verbose = subprocess.CompletedProcess(
            [], 0, stdout='LLD 17.0.6\n', stderr='')
        linker, code, _ = self.configure(verbose)
        self.assertEqual(ErrorCode.SUCCESS, code)
        self.assertEqual(default_search_dirs, linker.system_dirs)

    def test_program_missing(self):
        with self.assertLogs('ld', level='ERROR'):
            linker, code, _ = self.configure(
                side_effect=FileNotFoundError('ld'))
        self.assertEqual(ErrorCode.DELEGATE_LD_INFO, code)
        self.assertIsNone(linker.configuration)

    def test_program_fails(self):
        failed = subprocess.CompletedProcess([], 1, stdout='', stderr='')
        with self.assertLogs('ld', level='ERROR'):
            _, code, _ = self.configure(failed)
        self.assertEqual(ErrorCode.DELEGATE_LD_INFO, code)

    def test_foreign_triple_warns(self):
        verbose = subprocess.CompletedProcess(
            [], 0, stdout=LD_VERBOSE, stderr='')
        with self.assertLogs('ld', level='WARNING') as cm:
            _, code, _ = self.configure(
                verbose, target_triple='arm-none-eabi')
        self.assertEqual(ErrorCode.SUCCESS, code)
        self.assertIn('arm-none-eabi', cm.output[0])

    def test_host_triple_is_quiet(self):
        linker = GnuLinker(use_default_dirs=False)
        with patch.object(linker.logger, 'warning') as warning:
            linker.config(make_config(target_triple=host_triple()))
        warning.assert_not_called()


if __name__ == '__main__':
    unittest.main(verbosity=2)
