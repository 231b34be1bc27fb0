# -----------------------------------------------------------------------------
# Copyright (c) 2025--, The drivefs_trust Development Team.
#
# Distributed under the terms of the BSD 3-clause License.
#
# The full license is in the file LICENSE, distributed with this software.
# -----------------------------------------------------------------------------

import sys
import logging
from os import makedirs
from os.path import dirname, exists

SUCCESS = 25
logging.addLevelName(SUCCESS, 'SUCCESS')

LINE_FORMAT = '[%(levelname)s] %(message)s'


class ConsoleSink(logging.StreamHandler):
    """Writes status lines to stdout, and errors to stderr"""
    def __init__(self):
        super(ConsoleSink, self).__init__(sys.stdout)

    def emit(self, record):
        # sys.stdout/sys.stderr are looked up on every record so that
        # redirections done after construction are honored
        self.stream = sys.stderr if record.levelno >= logging.ERROR \
            else sys.stdout
        super(ConsoleSink, self).emit(record)


class FileSink(logging.FileHandler):
    """Appends status lines to a log file

    Parameters
    ----------
    log_fp : str
        The log file. Its directory is created if needed
    """
    def __init__(self, log_fp):
        log_dir = dirname(log_fp)
        if log_dir and not exists(log_dir):
            makedirs(log_dir)
        super(FileSink, self).__init__(log_fp, mode='a', encoding='utf-8')


def sinks_for_mode(log_mode, log_fp):
    """Builds the sinks matching a LOG_MODE value

    Parameters
    ----------
    log_mode : str
        One of 'cli', 'file', 'both' or 'none'
    log_fp : str
        The log file used by the 'file' and 'both' modes

    Returns
    -------
    list of logging.Handler
    """
    sinks = []
    if log_mode in ('cli', 'both'):
        sinks.append(ConsoleSink())
    if log_mode in ('file', 'both'):
        sinks.append(FileSink(log_fp))
    return sinks


class Notifier(object):
    """Emits leveled status lines to zero or more sinks

    Parameters
    ----------
    sinks : list of logging.Handler, optional
        Where the lines go. No sinks means no output
    """
    def __init__(self, sinks=None):
        self.sinks = list(sinks) if sinks else []
        formatter = logging.Formatter(LINE_FORMAT)
        for sink in self.sinks:
            sink.setFormatter(formatter)

    def info(self, msg):
        self._emit(logging.INFO, msg)

    def error(self, msg):
        self._emit(logging.ERROR, msg)

    def success(self, msg):
        self._emit(SUCCESS, msg)

    def _emit(self, level, msg):
        # records go straight to the sinks; no logger is registered, so
        # notifiers never accumulate in the logging manager
        record = logging.LogRecord(__name__, level, __file__, 0, msg, None,
                                   None)
        for sink in self.sinks:
            if level >= sink.level:
                sink.handle(record)

    def close(self):
        """Flushes and closes all sinks"""
        for sink in self.sinks:
            sink.flush()
            sink.close()
