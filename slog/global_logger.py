# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
A process-wide logger, with context-local overrides.

A program initializes the global logger once at startup:
```
init_logger(ident='my-daemon', facility='local2', to_stdout=True)
```
Library code then logs via `current_logger()`, and can specialize the logger for a dynamic extent:
```
with local_logger(current_logger().proxy(prefix='whatever: ')):
  current_logger().log('doing thing')
```
If nothing was initialized, a sink logger that discards everything is used.
'''

from contextlib import contextmanager
from contextvars import ContextVar
from sys import argv
from typing import Any, Iterator, Union

from .logger import Logger, LoggerConfigError
from .proxy import Proxy


AnyLogger = Union[Logger,Proxy]

_default_logger:Logger|None = None
_global_logger:Logger|None = None
_local_logger:ContextVar[AnyLogger|None] = ContextVar('slog_local_logger', default=None)


def default_logger() -> Logger:
  'The sink logger used when no logger has been initialized.'
  global _default_logger
  if _default_logger is None:
    _default_logger = Logger(f'default/{argv[0] if argv else "python"}')
  return _default_logger


def current_logger() -> AnyLogger:
  'Return the logger for the current context: the innermost `local_logger`, else the global logger, else the default.'
  return _local_logger.get() or _global_logger or default_logger()


def init_logger(**kwargs:Any) -> Logger:
  '''
  Create the global logger from `kwargs` (see `Logger`) and install it.
  Raises `LoggerConfigError` if the global logger was already initialized.
  '''
  global _global_logger
  if _global_logger is not None: raise LoggerConfigError(f'attempted to initialize the global logger twice: {_global_logger!r}')
  _global_logger = Logger(**kwargs)
  return _global_logger


def reset_logger() -> None:
  'Discard the global logger. Intended for tests.'
  global _global_logger
  _global_logger = None


@contextmanager
def local_logger(logger:AnyLogger) -> Iterator[AnyLogger]:
  'Make `logger` the current logger for the duration of the context.'
  token = _local_logger.set(logger)
  try: yield logger
  finally: _local_logger.reset(token)
