from configparser import ParsingError
import os
import signal
import sys

from listdep import logging
from listdep.app.argparse import arg, ArgParser, ConfigArgParser  # NOQA
from listdep.base import Context


class App(object):
    """Command-line application.

    Commands are plain functions registered with `add_command`; `run`
    parses the arguments, sets up the application logger and calls the
    selected command with its arguments as keyword arguments.
    """
    APP_NAME = "listdep"
    DEFAULT_CONFIG_FILE = "~/.listdep.conf"
    _commands = {}
    _argparser = ConfigArgParser(DEFAULT_CONFIG_FILE)
    _configured = False
    _context = None
    debug = False
    verbose = True

    def __init__(self):
        raise NotImplementedError()

    @classmethod
    def add_command(cls, name, command, args=None, description=None):
        args = args or {}
        cls._argparser.add_group(name, help=description)
        for arg_name, value in sorted(args.items(),
                                      key=lambda x: x[1].names[0]):
            cls.add_arg(arg_name, value, group=name)
        cls._commands[name] = command

    @classmethod
    def add_arg(cls, name, value, group=None):
        cls._argparser.add_arg(name, value, group)

    @classmethod
    def configure(cls, **kwargs):
        if cls._configured:
            return
        loglevel_choices = [logging.getLevelName(level) for level in
                            [logging.FATAL,
                             logging.WARN,
                             logging.INFO,
                             logging.DEBUG,
                             logging.TRACE]]
        cls.add_arg('debug', arg('--debug',
                                 action='store_true',
                                 default=kwargs.get('debug', False),
                                 help='Enable debug mode'))
        cls.add_arg('logdir', arg('--logdir',
                                  type=str,
                                  default=kwargs.get('logdir', None),
                                  help='Log directory',
                                  metavar='DIR'))
        cls.add_arg('loglevel', arg('--loglevel',
                                    type=str,
                                    default=kwargs.get('loglevel', 'info'),
                                    help='Log level',
                                    choices=loglevel_choices))
        cls.add_arg('logoption', arg('--logoption',
                                     type=str,
                                     default=kwargs.get('logoption', 'd'),
                                     help='Log option: {a,d,h,n,w}',
                                     metavar='VALUE'))
        cls.add_arg('quiet', arg('--quiet',
                                 action='store_true',
                                 default=kwargs.get('quiet', False),
                                 help='execute quietly: '
                                 'does not print any message'))
        cls._configured = True

    @classmethod
    def run(cls, args=None, command=None):
        cls.configure()
        try:
            command, command_args, common_args = cls._argparser.parse(
                args, command=command, section_prefix=cls.APP_NAME)
        except (FileNotFoundError, ParsingError, ValueError) as e:
            print(e, file=sys.stderr)
            sys.exit(1)

        def handler(signum, frame):
            raise SystemExit("Signal(%d) received: "
                             "The program %s will be closed"
                             % (signum, cls.APP_NAME))
        signal.signal(signal.SIGINT, handler)
        signal.signal(signal.SIGTERM, handler)

        logger = None
        try:
            logger = cls._setup_logger(common_args)
            cls._context = Context(command_args)
            logging.d("App.run called - command: {}, args: {}"
                      .format(command, command_args))
            cls._commands[command](**command_args)
            logging.i("*** [DONE] ***")
        except Exception:
            logging.e("Exception occurred during execution:",
                      exc_info=True, stack_info=cls.debug)
        except SystemExit as e:
            logging.w(e)
        finally:
            if logger is not None:
                logger.finalize()

    @classmethod
    def _setup_logger(cls, config):
        cls.verbose = not config['quiet']
        cls.debug = config['debug']

        loglevel = logging.getLevelName(config['loglevel'])
        if cls.debug and logging.DEBUG < loglevel < logging.DISABLE:
            loglevel = logging.DEBUG
        logger_config = {
            'logdir': config['logdir'],
            'filemode': 'a',
            'level': loglevel,
            'verbosity': loglevel if cls.verbose else logging.DISABLE,
        }
        for char in config['logoption']:
            if char in ('a', 'n', 'w'):
                logger_config['filemode'] = char
            elif char == 'd':
                logger_config['filelog'] = False
            elif char == 'h':
                logger_config['filesuffix'] = '-' + os.uname()[1]
            else:
                raise ValueError("Invalid logoption specified: {}"
                                 .format(char))
        logging.AppLogger.configure(**logger_config)
        logger = logging.AppLogger(cls.APP_NAME)
        logger.setLevel(loglevel)
        logging.setRootLogger(logger)

        logger.v(str(sys.version_info))
        logger.i("sys.argv: %s" % str(sys.argv))
        logger.i("*** [START] ***")
        return logger

    @classmethod
    def context(cls):
        return cls._context
