# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Log destinations. Each destination receives fully formatted messages and writes them somewhere.
'''

from os import makedirs
from os.path import join as path_join
from time import ctime, localtime, strftime
from typing import Any, TextIO


class Dest:
  'Base class for log destinations.'

  name = 'dest'

  def emit(self, message:str, level:str) -> None: raise NotImplementedError

  def __repr__(self) -> str: return f'{type(self).__name__}({self.name!r})'


class MemoryDest(Dest):
  'Append each event to a list, as a dict with "message" and "level" keys.'

  name = 'self'

  def __init__(self, events:list[dict[str,Any]]|None=None) -> None:
    self.events:list[dict[str,Any]] = [] if events is None else events

  def emit(self, message:str, level:str) -> None:
    self.events.append({'message': message, 'level': level})


class StreamDest(Dest):
  'Write each message as a line to a text stream.'

  def __init__(self, name:str, stream:TextIO) -> None:
    self.name = name
    self.stream = stream

  def emit(self, message:str, level:str) -> None:
    print(message, file=self.stream, flush=True)


class FileDest(Dest):
  '''
  Append each message, prefixed by the local time, to a dated file named `{ident}.YYYYMMDD` in `dir`.
  The file is opened for each message, so that external log rotation is harmless.
  '''

  name = 'logfile'

  def __init__(self, ident:str, dir:str) -> None:
    self.ident = ident
    self.dir = dir

  @property
  def path(self) -> str:
    return path_join(self.dir, f'{self.ident}.{strftime("%Y%m%d", localtime())}')

  def emit(self, message:str, level:str) -> None:
    makedirs(self.dir, exist_ok=True)
    with open(self.path, 'a', encoding='utf-8', errors='backslashreplace') as f:
      print(ctime(), message, file=f)


class SyslogDest(Dest):
  '''
  Send each message to syslog, replacing newlines with '<LF>'.
  The `syslog` module is only available on Unix platforms.
  '''

  name = 'syslog'

  def __init__(self, ident:str, facility:str) -> None:
    import syslog
    self.syslog = syslog
    try: self.facility = getattr(syslog, f'LOG_{facility.upper()}')
    except AttributeError as e: raise ValueError(f'invalid syslog facility: {facility!r}') from e
    self.ident = ident
    syslog.openlog(ident, syslog.LOG_PID, self.facility)

  def emit(self, message:str, level:str) -> None:
    priority = self.syslog.LOG_DEBUG if level == 'debug' else self.syslog.LOG_INFO
    self.syslog.syslog(self.facility | priority, message.replace('\n', '<LF>'))
