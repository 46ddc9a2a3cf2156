# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Flogging: turning loosely structured log messages into strings.

A message is either a string, which is used verbatim,
or a sequence of a printf-style format string followed by arguments.
Arguments that are not plain scalars are rendered as compact JSON surrounded by double braces,
e.g. `{{{"a":1}}}`, so that structured values remain distinguishable from text.
'''

from typing import Any

from .json import render_json
from .values import Lazy


class FlogError(ValueError): pass


def flog(message:Any) -> str:
  'Render a log message as a string.'
  if isinstance(message, Lazy): message = message()
  if isinstance(message, str): return message
  if isinstance(message, (list, tuple)):
    if not message: return ''
    fmt, *args = message
    if isinstance(fmt, Lazy): fmt = fmt()
    if not isinstance(fmt, str): raise FlogError(f'flog format must be a string; received {fmt!r}')
    try: return fmt % tuple(flog_arg(a) for a in args)
    except (TypeError, ValueError) as e:
      raise FlogError(f'bad flog format: {fmt!r}; args: {args!r}') from e
  return flog_arg(message)


def flog_arg(val:Any) -> str:
  'Render a single flog argument.'
  if isinstance(val, Lazy): val = val()
  if val is None: return '{{null}}'
  if isinstance(val, str): return val
  if isinstance(val, bool): return 'true' if val else 'false'
  if isinstance(val, (int, float)): return str(val)
  try: return '{{' + render_json(val) + '}}'
  except (TypeError, ValueError): # Circular reference or unsortable keys; repr copes with both.
    return '{{' + repr(val) + '}}'
