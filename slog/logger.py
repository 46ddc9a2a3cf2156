# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
A small logger that writes flogged messages and logfmt events to a fixed set of destinations.

```
logger = Logger('my-daemon', to_stderr=True, facility='local2')
logger.log('starting up')
logger.log(['loaded %s records from %s', 12, path])
logger.log_event('request', {'method': 'GET', 'path': '/', 'headers': headers})
```
'''

from os import getpid
from sys import argv, stderr, stdout
from typing import Any, Callable, Iterable, TYPE_CHECKING, Union

from .dest import Dest, FileDest, MemoryDest, StreamDest, SyslogDest
from .env import env_debug, env_log_dir, env_nosyslog
from .flog import flog, FlogError
from .logfmt import format_event_string, logfmt_pairs

if TYPE_CHECKING:
  from .proxy import Proxy


class LoggerConfigError(ValueError): pass


class LogDispatchError(OSError):
  'Raised when a destination fails to write or encode a message and the logger is `fail_fatal`.'


class LogFatal(Exception):
  'Raised by `log_fatal` after the message has been logged.'

  @property
  def message(self) -> str: return str(self.args[0])


Prefix = Union[None, str, Callable[[str],str]]
Prefixes = Union[Prefix, Iterable[Prefix]]


def prefix_list(prefix:Prefixes) -> list[Prefix]:
  if prefix is None or isinstance(prefix, str) or callable(prefix): return [prefix]
  return list(prefix)


def apply_prefixes(message:str, prefixes:Iterable[Prefix]) -> str:
  '''
  Apply prefixes to a message. The first prefix ends up outermost.
  String prefixes are prepended verbatim; callable prefixes are applied to the message.
  '''
  for prefix in reversed(list(prefixes)):
    if not prefix: continue
    if isinstance(prefix, str): message = prefix + message
    else: message = prefix(message)
  return message


class Logger:
  '''
  The root logger. Messages are dispatched to every configured destination.
  A logger with no destinations is a sink.
  '''

  def __init__(self, ident:str, *, to_self=False, to_stdout=False, to_stderr=False, to_file=False,
   facility:str|None=None, log_pid=True, fail_fatal=True, debug:bool|None=None, muted=False, prefix:Prefix=None,
   log_dir:str|None=None) -> None:

    if not ident: raise LoggerConfigError('no ident specified for Logger')
    self.ident = ident
    self.log_pid = log_pid
    self.fail_fatal = fail_fatal
    self._debug = env_debug() if debug is None else bool(debug)
    self._muted = bool(muted)
    self._prefix:Prefix = prefix
    self._memory:MemoryDest|None = None
    self.dests:list[Dest] = []

    if to_file:
      self.dests.append(FileDest(ident, dir=(log_dir or env_log_dir())))
    if facility and not env_nosyslog():
      try: self.dests.append(SyslogDest(ident, facility))
      except (ImportError, ValueError) as e: raise LoggerConfigError(f'cannot log to syslog: {e}') from e
    if to_self:
      self._memory = MemoryDest()
      self.dests.append(self._memory)
    if to_stderr: self.dests.append(StreamDest('stderr', stderr))
    if to_stdout: self.dests.append(StreamDest('stdout', stdout))


  @classmethod
  def tester(cls, **kwargs:Any) -> 'Logger':
    'Create a logger that only logs to itself; useful in tests.'
    kwargs.setdefault('ident', f'{getpid()}:{argv[0] if argv else "python"}')
    kwargs.setdefault('to_self', True)
    kwargs.update(to_stdout=False, to_stderr=False, to_file=False, facility=None)
    return cls(**kwargs)


  def __repr__(self) -> str: return f'{type(self).__name__}({self.ident!r}, dests={self.dests})'

  @property
  def logger(self) -> 'Logger': return self

  @property
  def config_id(self) -> str: return self.ident

  @property
  def events(self) -> list[dict[str,Any]]:
    'The events logged to this logger itself. Raises `LoggerConfigError` if the logger is not logging to self.'
    if self._memory is None: raise LoggerConfigError(f'events requested from a logger not logging to self: {self.ident!r}')
    return self._memory.events

  def clear_events(self) -> None:
    del self.events[:]


  @property
  def prefix(self) -> Prefix: return self._prefix

  @prefix.setter
  def prefix(self, prefix:Prefix) -> None: self._prefix = prefix

  def clear_prefix(self) -> None: self._prefix = None

  @property
  def debug(self) -> bool: return self._debug

  @debug.setter
  def debug(self, debug:bool) -> None: self._debug = bool(debug)

  @property
  def muted(self) -> bool: return self._muted

  @muted.setter
  def muted(self, muted:bool) -> None: self._muted = bool(muted)

  def mute(self) -> None: self._muted = True

  def unmute(self) -> None: self._muted = False


  def log(self, *messages:Any, prefix:Prefixes=None, level='info', fatal=False) -> None:
    '''
    Flog each message, join them with spaces, apply prefixes and dispatch the result.
    If `fatal`, raise `LogFatal` with the message afterwards, even when muted.
    '''
    if self._muted and not fatal: return
    try:
      message = ' '.join(flog(m) for m in messages)
    except FlogError:
      if self.fail_fatal: raise
      message = '(no message could be logged)'
    else:
      message = apply_prefixes(message, [self._prefix, *prefix_list(prefix)])
      self._dispatch(message, level)
    if fatal: raise LogFatal(message)

  __call__ = log

  def info(self, *messages:Any, prefix:Prefixes=None) -> None: self.log(*messages, prefix=prefix)

  def log_fatal(self, *messages:Any, prefix:Prefixes=None) -> None:
    self.log(*messages, prefix=prefix, fatal=True)

  fatal = log_fatal

  def log_debug(self, *messages:Any, prefix:Prefixes=None) -> None:
    if not self._debug: return
    self.log(*messages, prefix=prefix, level='debug')


  def log_event(self, event_type:str, data:Any=(), *, ctx:Any=(), level='info') -> None:
    '''
    Log an event as a logfmt line: `event=<event_type>` followed by the context pairs and the flattened data.
    `data` and `ctx` can be mappings or pair sequences; see `slog.logfmt.logfmt_pairs`.
    Event lines are not prefixed.
    '''
    if self._muted: return
    pairs = [('event', event_type), *logfmt_pairs(ctx), *logfmt_pairs(data)]
    self._dispatch(format_event_string(pairs), level)

  def log_debug_event(self, event_type:str, data:Any=(), *, ctx:Any=()) -> None:
    if not self._debug: return
    self.log_event(event_type, data, ctx=ctx, level='debug')


  def proxy(self, *, prefix:Prefix=None, debug:bool|None=None, muted:bool|None=None, ctx:Any=()) -> 'Proxy':
    'Create a proxy that relays to this logger.'
    from .proxy import Proxy
    return Proxy(self, proxy_prefix=prefix, debug=debug, muted=muted, ctx=ctx)


  def _dispatch(self, message:str, level:str) -> None:
    if self.log_pid: message = f'[{getpid()}] {message}'
    for dest in self.dests:
      try: dest.emit(message, level)
      except (OSError, UnicodeError) as e:
        if self.fail_fatal: raise LogDispatchError(f'{self.ident}: {dest.name}: {e}') from e
