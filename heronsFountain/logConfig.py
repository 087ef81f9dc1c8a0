# -- Logging Configuration -- #

'''
Sets up the package logger for the fountain engine and runner.

Modules log through logging.getLogger(__name__), so everything
lands under the 'heronsFountain' namespace configured here. The runner
keeps printing its tables; log records carry state transitions only.

Sean Bowman [02/12/2026]
'''

from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER = 'heronsFountain'

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def _resolveLevel(level: int | str) -> int:
    '''Numeric level from an int or a name like 'debug'; unknown names give INFO.'''
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def _detachHandlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setupLogging(level: int | str = logging.INFO, logFile: str | None = None) -> logging.Logger:
    '''
    Configure the 'heronsFountain' logger.

    Calling it again replaces the previous handlers, so repeated runner
    invocations in one process do not duplicate records.

    Parameters:
    -----------
    level : int | str
        Logging level (e.g. logging.DEBUG or 'DEBUG')
    logFile : str | None
        Optional path; when given, log records are also written there

    Returns:
    --------
    logging.Logger : The configured package logger
    '''
    level = _resolveLevel(level)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    _detachHandlers(logger)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if logFile:
        handlers.append(logging.FileHandler(logFile, mode='w', encoding='utf-8'))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug('Logging to %s', ', '.join(type(h).__name__ for h in handlers))
    return logger
