'''

This module contains code for logging treebag processes.

'''

import time

import logging
from logging import DEBUG, INFO

__all__ = ['get_logger',
           'get_module_logger',
           'log_to_stderr',
           'TimingLog',
           'DEBUG',
           'INFO',
           'DEFAULT_LEVEL',
           'LOGGER_NAME']
LOGGER_NAME = "TREEBAG"
DEFAULT_LEVEL = DEBUG
INFO = INFO


def create_module_logger(name):
    logger = logging.getLogger("{}.{}".format(LOGGER_NAME, name))

    _module_loggers[name] = logger
    return logger


def get_module_logger(name):
    try:
        logger = _module_loggers[name]
    except KeyError:
        logger = create_module_logger(name)

    return logger


_module_loggers = {}
_logger = None


def format_elapsed_time(duration_milliseconds):
    hours, rem = divmod(duration_milliseconds/1000, 3600)
    minutes, seconds = divmod(rem, 60)
    if hours:
        return ("{:0>2}:{:0>2}:{:05.2f}".format(int(hours),int(minutes),seconds))
    else:
        return ("{:0>2}:{:05.2f}".format(int(minutes),seconds))


class ElapsedTimeFormatter(logging.Formatter):
    def format(self, record):
        record.elapsedTime = format_elapsed_time(record.relativeCreated)
        return super(ElapsedTimeFormatter, self).format(record)

LOG_FORMAT = '[{elapsedTime}] {processName:s}/{levelname:s}: {message:s}'


def get_logger():
    '''
    Returns the package logger
    '''
    global _logger

    if not _logger:
        _logger = logging.getLogger(LOGGER_NAME)
        _logger.handlers = []
        _logger.addHandler(logging.NullHandler())
        _logger.setLevel(DEBUG)
        _module_loggers[LOGGER_NAME] = _logger

    return _logger


def log_to_stderr(level=None):
    '''
    Turn on logging and add a handler which prints to stderr

    Parameters
    ----------
    level : int
            minimum level of the messages that will be logged

    '''

    if not level:
        level = DEFAULT_LEVEL

    logger = get_logger()

    # avoid creation of multiple stream handlers for logging to console
    for entry in logger.handlers:
        if (isinstance(entry, logging.StreamHandler)) and \
                (entry.formatter is not None) and \
                (entry.formatter._fmt == LOG_FORMAT):
            entry.setLevel(level)
            logger.setLevel(level)
            return logger

    formatter = ElapsedTimeFormatter(LOG_FORMAT, style='{')
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False
    logger.setLevel(level)

    return logger


def timesize_stack(t):
    if t<60:
        return f"{t:.2f}s"
    elif t<3600:
        return f"{t//60:.0f}m {timesize_stack(t%60)}"
    elif t<86400:
        return f"{t//3600:.0f}h {timesize_stack(t%3600)}"
    else:
        return f"{t//86400:.0f}d {timesize_stack(t%86400)}"


class TimingLog:

    def __init__(self, label='', log=None, level=50):
        if log is None:
            log = get_logger()
        self.label = label
        self.log = log
        self.level = level
        self.split_time = None

    def __enter__(self):
        self.start_time = time.time()
        self.log.log(self.level, f"<BEGIN> {self.label}")
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        now = time.time()
        if self.split_time is not None:
            self.log.log(self.level, f"<SPLIT> {self.label} <{timesize_stack(now - self.split_time)}>")
        if exc_type is None:
            self.log.log(self.level, f"<-END-> {self.label} <{timesize_stack(now - self.start_time)}>")
        else:
            self.log.log(self.level, f"<ERROR> {self.label} <{timesize_stack(now - self.start_time)}>")

    def split(self, note=''):
        if self.split_time is None:
            self.split_time = self.start_time
        now = time.time()
        if note:
            note = " / " + note
        self.log.log(self.level, f"<SPLIT> {self.label}{note} <{timesize_stack(now - self.split_time)}>")
        self.split_time = now


get_logger()
