# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Environment configuration for slog loggers.

* SLOG_DEBUG: if truthful, loggers created without an explicit `debug` argument log debug messages.
* SLOG_PATH: directory for file logs; defaults to the system temporary directory.
* SLOG_NOSYSLOG: if truthful, syslog destinations are never created.
'''

import re
from os import environ
from tempfile import gettempdir
from typing import Iterable, Iterator


class EnvParseError(ValueError): pass


def env_flag(name:str) -> bool:
  'Return True if the environment variable `name` is set to a truthful value: not empty, "0", "false", "no" or "off".'
  val = environ.get(name, '').strip().lower()
  return val not in _false_strs

_false_strs = frozenset(['', '0', 'false', 'no', 'off'])


def env_debug() -> bool: return env_flag('SLOG_DEBUG')

def env_nosyslog() -> bool: return env_flag('SLOG_NOSYSLOG')

def env_log_dir() -> str: return environ.get('SLOG_PATH') or gettempdir()


def parse_env_lines(name:str, lines:Iterable[str]) -> Iterator[tuple[str,str]]:
  '''
  Parse shell-style environment variable lines of the form "KEY=value" or "export KEY=value".
  Comments indicated by `#` are ignored.
  Quoted strings are not supported.
  '''
  for line_num, line in enumerate(lines, 1):
    line = line.strip()
    if not line or line.startswith('#'): continue
    m = _env_line_re.fullmatch(line)
    if not m: raise EnvParseError(f'{name}:{line_num}: invalid line: {line!r}')
    yield m['key'], m['value']


_env_line_re = re.compile(r'''(?x)
  (?P<export> export \s+ )?
  (?P<key> [A-Za-z_][A-Za-z0-9_]* )
  =
  (?P<value> [^#'"\n\s]* )
  \s*
  (?P<comment> [#].* )?
''')


def load_env(path:str) -> None:
  '''
  Load shell-style environment definitions from `path` into `os.environ`,
  e.g. a file containing `SLOG_DEBUG=1`.
  See `parse_env_lines` for details.
  '''
  with open(path) as f:
    for key, value in parse_env_lines(path, f):
      environ[key] = value
