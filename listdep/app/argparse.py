import argparse
from collections import OrderedDict
from configparser import ConfigParser
import os
import sys


class CmdlineArg(object):

    def __init__(self, *args, **kwargs):
        assert len(args) > 0
        self._names = sorted((name.lstrip('-') for name in args),
                             key=len, reverse=True)
        self._args = args
        self._kwargs = kwargs

    @property
    def names(self):
        return self._names

    @property
    def args(self):
        return self._args

    @property
    def kwargs(self):
        return self._kwargs


def arg(*args, **kwargs):
    return CmdlineArg(*args, **kwargs)


COMMON = 'common'


class ArgParser(object):
    """Argument parser where every command owns a group of arguments.

    With a single command, its arguments are registered at the top level;
    otherwise each command becomes a subcommand.
    """
    DEFAULT_FORMATTER_CLASS = argparse.ArgumentDefaultsHelpFormatter

    def __init__(self):
        self._groups = OrderedDict()
        self._descriptions = {}
        self._groups[COMMON] = OrderedDict()

    def add_arg(self, name, value, group=None):
        group = COMMON if group is None else group
        if group not in self._groups:
            self.add_group(group)
        value.kwargs['dest'] = name
        self._groups[group][name] = value

    def add_group(self, group, **kwargs):
        if group not in self._groups:
            self._groups[group] = OrderedDict()
        if kwargs or group not in self._descriptions:
            self._descriptions[group] = kwargs

    @property
    def commands(self):
        return [group for group in self._groups if group != COMMON]

    def group_args(self, group):
        return self._groups[group]

    def parse(self, args=None, parser=None, command=None):
        if args is None:
            args = sys.argv[1:]
        args = list(args)
        commands = self.commands
        if parser is None:
            parser = self._init_parser(
                formatter_class=self.DEFAULT_FORMATTER_CLASS)
        if command is not None:
            if command not in commands:
                raise ValueError("Undefined command is specified: {}"
                                 .format(command))
            if len(commands) > 1:
                args = [command] + args

        parsed_args = vars(parser.parse_args(args))
        group = commands[0] if len(commands) == 1 \
            else parsed_args['command']
        command_args = {name: parsed_args[name]
                        for name in self._groups[group]}
        common_args = {name: parsed_args[name]
                       for name in self._groups[COMMON]}
        return group, command_args, common_args

    def _init_parser(self, **kwargs):
        commands = self.commands
        if not commands:
            raise RuntimeError("At least one command should be defined.")
        parser = argparse.ArgumentParser(**kwargs)
        for value in self._groups[COMMON].values():
            parser.add_argument(*value.args, **value.kwargs)

        if len(commands) == 1:
            for value in self._groups[commands[0]].values():
                parser.add_argument(*value.args, **value.kwargs)
            return parser

        subparsers = parser.add_subparsers(
            title='commands', help='available commands', dest='command')
        subparsers.required = True
        for group in commands:
            subparser = subparsers.add_parser(
                group, formatter_class=kwargs.get(
                    'formatter_class', argparse.HelpFormatter),
                **self._descriptions[group])
            for value in self._groups[group].values():
                subparser.add_argument(*value.args, **value.kwargs)
        return parser


class ConfigArgParser(ArgParser):
    """ArgParser that takes default values from an INI file.

    Sections are named ``<prefix>.common`` and ``<prefix>.<command>``;
    keys are the long option names without leading dashes.
    """

    def __init__(self, default_config_file):
        super().__init__()
        self._default_config_file = default_config_file
        self._config = None
        self._source = None

    def parse(self, args=None, parser=None, command=None, section_prefix=''):
        if args is None:
            args = sys.argv[1:]
        if parser is not None:
            return super().parse(args, parser, command)

        parser = argparse.ArgumentParser(add_help=False)
        parser.add_argument('--config',
                            type=str,
                            default=self._default_config_file,
                            help='configuration file',
                            metavar='FILE')
        parser.add_argument('--saveconfig',
                            type=str,
                            help='save current configuration to file',
                            metavar='FILE')
        namespace, args = parser.parse_known_args(args)
        config_file = os.path.expanduser(namespace.config)

        if os.path.exists(config_file):
            self._config = self._read_config(config_file, section_prefix)
            self._source = config_file
        elif config_file != os.path.expanduser(self._default_config_file):
            raise FileNotFoundError("config file was not found: "
                                    "'%s'" % config_file)

        parser = self._init_parser(
            parents=[parser], formatter_class=self.DEFAULT_FORMATTER_CLASS)
        command, command_args, common_args = \
            super().parse(args, parser, command)

        if namespace.saveconfig is not None:
            self._write_config(os.path.expanduser(namespace.saveconfig),
                               OrderedDict([(COMMON, common_args),
                                            (command, command_args)]),
                               section_prefix)
        return command, command_args, common_args

    def _lookup(self, group, option):
        for name, value in self._groups[group].items():
            if option in value.names:
                return name, value
        return None, None

    def _read_config(self, file, prefix):
        config = {}
        parser = ConfigParser()
        parser.read(file)
        for group in self._groups:
            section = prefix + '.' + group
            config[group] = {}
            if section not in parser:
                continue
            for option, text in parser.items(section):
                name, value = self._lookup(group, option)
                if value is None:
                    continue
                value.kwargs['default'] = _cast_value(text, value)
                value.kwargs.pop('required', None)
                config[group][name] = value.kwargs['default']
        return config

    def _write_config(self, file, config, prefix):
        parser = ConfigParser()
        for group, values in config.items():
            definitions = self._groups[group]
            parser[prefix + '.' + group] = {
                definitions[name].names[0]: str(value)
                for name, value in values.items()
                if name in definitions and value is not None}
        with open(file, 'w') as f:
            parser.write(f)

    @property
    def config(self):
        return self._config

    @property
    def source(self):
        return self._source


def _cast_value(text, value):
    kwargs = value.kwargs
    if 'type' in kwargs:
        _type = kwargs['type']
    elif kwargs.get('action') in ('store_true', 'store_false'):
        _type = bool
    elif kwargs.get('default') is not None:
        _type = type(kwargs['default'])
    else:
        return text
    if _type is bool:
        state = ConfigParser.BOOLEAN_STATES.get(text.lower())
        if state is None:
            raise ValueError("Not a boolean: {}={}"
                             .format(value.names[0], text))
        return state
    return _type(text)
