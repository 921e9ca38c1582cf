from enum import Enum
from datetime import datetime
import logging
import logging.config
import os
import sys
import time
import uuid

from dateutil.tz import tzlocal


DISABLE = sys.maxsize
CRITICAL = logging.CRITICAL
FATAL = logging.FATAL
ERROR = logging.ERROR
WARNING = logging.WARNING
WARN = logging.WARN
INFO = logging.INFO
DEBUG = logging.DEBUG
TRACE = 5
NOTSET = logging.NOTSET

for _level, _name in ((DISABLE, 'disabled'), (CRITICAL, 'critical'),
                      (ERROR, 'error'), (WARNING, 'warning'),
                      (INFO, 'info'), (DEBUG, 'debug'), (TRACE, 'trace'),
                      (NOTSET, 'none')):
    logging.addLevelName(_level, _name)

BASIC_FORMAT = logging.BASIC_FORMAT
APP_FORMAT = "%(asctime)-15s\t%(accessid)s\t[%(levelname)s]\t%(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S.%f %Z"


def _format_time(format, t, msecs=0):
    if '%f' in format:
        format = format.replace('%f', '{:03d}'.format(int(msecs)))
    return time.strftime(format, t)


class Formatter(logging.Formatter):

    def formatTime(self, record, datefmt=None):
        ct = self.converter(record.created)
        if datefmt:
            return _format_time(datefmt, ct, record.msecs)
        t = time.strftime(self.default_time_format, ct)
        return self.default_msec_format % (t, record.msecs)


class Color(int, Enum):
    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7


class ColoredFormatter(Formatter):
    FORMAT = "\033[%dm%s\033[0m"
    COLORS = {
        CRITICAL: Color.RED,
        ERROR: Color.RED,
        WARNING: Color.YELLOW,
        INFO: Color.WHITE,
        DEBUG: Color.CYAN,
        TRACE: Color.CYAN,
    }

    def format(self, record):
        s = super().format(record)
        color = ColoredFormatter.COLORS.get(record.levelno)
        if color is not None:
            s = ColoredFormatter.FORMAT % (30 + color, s)
        return s


class Logger(logging.Logger):

    def __init__(self, name, level=NOTSET, handlers=()):
        self._initialized = False
        super().__init__(name, level)
        for hdlr in handlers:
            self.addHandler(hdlr)
        self.initialize()

    def setLevel(self, level):
        super().setLevel(level)
        # not registered in the manager, so its cache is not cleared there
        self._cache.clear()

    def trace(self, msg, *args, **kwargs):
        if self.isEnabledFor(TRACE):
            self._log(TRACE, msg, args, **kwargs)

    e = logging.Logger.error
    w = logging.Logger.warning
    i = logging.Logger.info
    d = logging.Logger.debug
    v = trace

    def initialize(self):
        self._initialized = True

    def finalize(self):
        for hdlr in list(self.handlers):
            self.removeHandler(hdlr)
            hdlr.close()
        self.disabled = True

    @property
    def initialized(self):
        return self._initialized


class RootLogger(Logger):

    def __init__(self, level):
        Logger.__init__(self, "root", level)


def setRootLogger(root):
    if not isinstance(root, Logger):
        raise TypeError("logger not derived from listdep.logging.Logger: "
                        + type(root).__name__)
    logging.root = root
    Logger.root = root
    Logger.manager.root = root


logging.setLoggerClass(Logger)
setRootLogger(RootLogger(WARNING))


class AppLogger(Logger):
    """Logger of a single application run.

    Every record carries a short access id; the start and the end of the
    run are logged together with the elapsed time.
    """
    _config = {
        'level': INFO,
        'verbosity': TRACE,
        'filelog': True,
        'logdir': None,
        'filename': "%Y%m%d.log",
        'filemode': 'a',
        'fileprefix': '',
        'filesuffix': '',
        'fmt': APP_FORMAT,
        'datefmt': DATE_FORMAT,
        'mkdir': False,
    }

    @classmethod
    def configure(cls, **kwargs):
        cls._config.update(kwargs)

    def initialize(self):
        if self._initialized:
            return
        super().initialize()
        config = AppLogger._config
        now = datetime.now(tzlocal())
        self._accessid = uuid.uuid4().hex[:6]
        self._accesssec = now
        self._accesstime = now.strftime(
            config['datefmt'].replace('%f', '{:03d}'.format(
                now.microsecond // 1000)))

        if not self.handlers:
            if config['filelog']:
                self.addHandler(self._create_file_handler(config))
            stream_handler = logging.StreamHandler()
            stream_handler.setLevel(config['verbosity'])
            stream_handler.setFormatter(
                ColoredFormatter(config['fmt'], config['datefmt']))
            self.addHandler(stream_handler)

        self.info("LOG Start with ACCESSID=[%s] ACCESSTIME=[%s]",
                  self._accessid, self._accesstime)

    def _create_file_handler(self, config):
        filemode = config['filemode'] or 'a'
        if filemode not in ('a', 'w', 'n'):
            raise ValueError("Invalid filemode specified: {}"
                             .format(filemode))
        logfile = self._resolve_file(config, numbering=(filemode == 'n'))
        handler = logging.FileHandler(
            logfile, mode='w' if filemode == 'n' else filemode)
        handler.setLevel(config['level'])
        handler.setFormatter(Formatter(config['fmt'], config['datefmt']))
        return handler

    @staticmethod
    def _resolve_file(config, numbering=False):
        logdir = config['logdir']
        if logdir:
            logdir = os.path.abspath(os.path.expanduser(logdir))
            if not os.path.isdir(logdir):
                if not config['mkdir']:
                    raise FileNotFoundError(
                        "logdir was not found: `%s`" % logdir)
                os.makedirs(logdir)
        else:
            logdir = ''

        if os.path.sep in config['filename']:
            raise ValueError("Invalid character '{}' is included: {}"
                             .format(os.path.sep, config['filename']))

        basename, ext = os.path.splitext(config['filename'])
        basename = (config['fileprefix']
                    + datetime.now().strftime(basename)
                    + config['filesuffix'])
        if not numbering:
            return os.path.join(logdir, basename + ext)
        number = 0
        while True:
            logfile = os.path.join(logdir, "{}-{}{}".format(
                basename, number, ext))
            if not os.path.exists(logfile):
                return logfile
            number += 1

    def finalize(self):
        elapsed = (datetime.now(tzlocal()) - self._accesssec).total_seconds()
        self.info("LOG End with ACCESSID=[%s] ACCESSTIME=[%s] "
                  "PROCESSTIME=[%3.9f]\n",
                  self._accessid, self._accesstime, elapsed)
        super().finalize()

    def filter(self, record):
        record.accessid = self._accessid
        return super().filter(record)

    @property
    def accessid(self):
        return self._accessid

    @property
    def accesstime(self):
        return self._accesssec


DEFAULT_CONFIG = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'color': {
            '()': ColoredFormatter,
            'format': BASIC_FORMAT,
            'datefmt': DATE_FORMAT,
        },
    },
    'handlers': {
        'color': {
            'class': 'logging.StreamHandler',
            'formatter': 'color',
        },
    },
    'root': {
        'level': 'WARNING',
        'handlers': ['color'],
    }
}

logging.config.dictConfig(DEFAULT_CONFIG)


def trace(msg, *args, **kwargs):
    logging.root.trace(msg, *args, **kwargs)


e = logging.error
w = logging.warning
i = logging.info
d = logging.debug
v = trace


for _name in logging.__all__:
    if _name not in globals():
        globals()[_name] = getattr(logging, _name)
