import os
import tempfile
import unittest

from listdep.app.argparse import arg, ArgParser, ConfigArgParser


def define(parser):
    parser.add_arg('debug', arg('--debug', action='store_true',
                                default=False))
    parser.add_group('oracle', help='replay the oracle')
    parser.add_arg('input_file', arg('--input', '-i', type=str,
                                     required=True), group='oracle')
    parser.add_arg('max_length', arg('--max-length', type=int,
                                     default=100), group='oracle')
    return parser


class TestArgParser(unittest.TestCase):

    def test_single_command(self):
        parser = define(ArgParser())
        command, command_args, common_args = parser.parse(
            ['-i', 'train.conll', '--debug'])
        self.assertEqual(command, 'oracle')
        self.assertEqual(command_args,
                         {'input_file': 'train.conll', 'max_length': 100})
        self.assertEqual(common_args, {'debug': True})

    def test_multiple_commands(self):
        parser = define(ArgParser())
        parser.add_arg('model_file', arg('--model', type=str),
                       group='decode')
        command, command_args, common_args = parser.parse(
            ['decode', '--model', 'model.pkl'])
        self.assertEqual(command, 'decode')
        self.assertEqual(command_args, {'model_file': 'model.pkl'})
        self.assertEqual(common_args, {'debug': False})
        command, command_args, _ = parser.parse(
            ['--input', 'x.conll'], command='oracle')
        self.assertEqual(command, 'oracle')
        self.assertEqual(command_args['input_file'], 'x.conll')

    def test_undefined(self):
        parser = ArgParser()
        self.assertRaises(RuntimeError, lambda: parser.parse([]))
        parser = define(ArgParser())
        self.assertRaises(ValueError,
                          lambda: parser.parse([], command='decode'))


class TestConfigArgParser(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.config_file = os.path.join(self.tmpdir.name, 'listdep.conf')
        with open(self.config_file, 'w') as f:
            f.write("[listdep.common]\n"
                    "debug = yes\n"
                    "[listdep.oracle]\n"
                    "input = dev.conll\n"
                    "max-length = 40\n"
                    "unknown = 1\n")

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_read_config(self):
        parser = define(ConfigArgParser(self.config_file))
        command, command_args, common_args = parser.parse(
            ['--max-length', '60'], section_prefix='listdep')
        self.assertEqual(command, 'oracle')
        self.assertEqual(command_args,
                         {'input_file': 'dev.conll', 'max_length': 60})
        self.assertEqual(common_args, {'debug': True})
        self.assertEqual(parser.source, self.config_file)
        self.assertEqual(parser.config['oracle'],
                         {'input_file': 'dev.conll', 'max_length': 40})

    def test_save_config(self):
        saved = os.path.join(self.tmpdir.name, 'saved.conf')
        parser = define(ConfigArgParser('~/.listdep-nonexistent.conf'))
        parser.parse(['-i', 'a.conll', '--saveconfig', saved],
                     section_prefix='listdep')
        parser = define(ConfigArgParser('~/.listdep-nonexistent.conf'))
        _, command_args, common_args = parser.parse(
            ['--config', saved], section_prefix='listdep')
        self.assertEqual(command_args,
                         {'input_file': 'a.conll', 'max_length': 100})
        self.assertEqual(common_args, {'debug': False})

    def test_invalid_boolean(self):
        with open(self.config_file, 'w') as f:
            f.write("[listdep.common]\n"
                    "debug = maybe\n")
        parser = define(ConfigArgParser(self.config_file))
        self.assertRaises(
            ValueError,
            lambda: parser.parse(['-i', 'a.conll'], section_prefix='listdep'))

    def test_config_not_found(self):
        parser = define(ConfigArgParser(self.config_file))
        self.assertRaises(
            FileNotFoundError,
            lambda: parser.parse(['--config', self.config_file + '.none']))


if __name__ == "__main__":
    unittest.main()
