# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

import re
from collections.abc import Mapping
from typing import Any, Iterable, Iterator
from unicodedata import category

from .flog import flog_arg
from .values import Lazy, Rendered


'''
A deterministic logfmt encoder and a forgiving logfmt parser.

Event data is an ordered sequence of key/value pairs.
Lists and mappings are flattened into dotted keys: `a.0=x a.1=y`; mapping keys are sorted,
and set elements are sorted by their string forms.
A list or mapping that was already visited during the current encoding is rendered as a back-reference
to the key path where it first appeared, e.g. `b=&a`; this makes cyclic structures safe to log.

The parser reverses the string escaping, but does not reassemble flattened structures,
and keys that were sanitized by the encoder stay sanitized.
Text that does not look like a key/value pair is reported under the key `junk`.
'''


_ident_chars = r'\x21\x23-\x3C\x3E-\x5B\x5D-\x7E' # Printable ASCII, excluding space, '"', '=', '\'.

_ident_re = re.compile(f'[{_ident_chars}]+')

_key_trans = str.maketrans({c: '?' for c in '\\"='})

missing_val = '~missing~'


def logfmt_key(key:Any) -> str:
  '''
  Convert a key into a valid logfmt key.
  An empty or missing key becomes '~'; every character that is not printable ASCII, or is one of '\\', '"', '=', becomes '?'.
  '''
  if key is None: return '~'
  if not isinstance(key, str): key = str(key)
  if not key: return '~'
  if _ident_re.fullmatch(key): return key
  return ''.join(c if '!' <= c <= '~' else '?' for c in key).translate(_key_trans)


def logfmt_val(value:Any) -> str:
  'Convert a scalar value into a logfmt value, quoting it if necessary.'
  if value is True: s = 'true'
  elif value is False: s = 'false'
  elif isinstance(value, str): s = value
  else: s = str(value)
  if _ident_re.fullmatch(s): return s
  return logfmt_quote(s)


_vertical_ws = frozenset('\x0b\x0c\x85\u2028\u2029')


class _QuoteTable(dict):
  'Translation table for `str.translate` that computes escapes for characters on demand.'

  def __missing__(self, code:int) -> str:
    c = chr(code)
    if c in _vertical_ws or category(c)[0] == 'C':
      esc = ''.join(f'\\x{{{b:02x}}}' for b in c.encode('utf-8', 'surrogatepass'))
    else:
      esc = c
    self[code] = esc
    return esc


_quote_table = _QuoteTable({
  ord('\\'): '\\\\',
  ord('"'): '\\"',
  ord('\t'): '\\t',
  ord('\n'): '\\n',
  ord('\r'): '\\r',
})


def logfmt_quote(string:str) -> str:
  '''
  Escape and double-quote a string.
  Backslash, double quote, tab, newline and carriage return get backslash escapes;
  other control characters and vertical whitespace are escaped as `\\x{hh}` per UTF-8 byte.
  '''
  return '"' + string.translate(_quote_table) + '"'


def logfmt_pairs(pairs:Any) -> list[tuple[Any,Any]]:
  '''
  Normalize event data into a list of key/value pairs.
  `pairs` can be a mapping (items are sorted by key), a sequence of 2-tuples,
  or a flat sequence of alternating keys and values; a trailing key without a value is paired with None.
  '''
  if isinstance(pairs, Mapping): return sorted(pairs.items(), key=_str_key)
  seq = list(pairs)
  if all(isinstance(p, tuple) and len(p) == 2 for p in seq): return seq
  if len(seq) % 2: seq.append(None)
  return list(zip(seq[0::2], seq[1::2]))


def _str_key(item:tuple[Any,Any]) -> str: return str(item[0])


Seen = dict[int,tuple[Any,str]]


def logfmt_flatten(pairs:Iterable[tuple[Any,Any]], seen:Seen|None=None, prefix:str|None=None) -> list[str]:
  '''
  Flatten key/value pairs into a list of `key=value` tokens, in depth-first pre-order.
  `seen` maps the ids of visited lists and mappings to the visited object and its back-reference string;
  the object is retained so that its id cannot be reused by another object during the traversal.
  '''
  if seen is None: seen = {}
  tokens:list[str] = []
  stack:list[tuple[str|None,Iterator[tuple[Any,Any]]]] = [(prefix, iter(pairs))]
  while stack:
    prefix, it = stack[-1]
    for key, value in it:
      k = logfmt_key(key)
      if prefix is not None: k = f'{prefix}.{k}'

      if isinstance(value, Lazy): value = value()
      if isinstance(value, Rendered): value = flog_arg(value.val)

      if value is None:
        value = missing_val
      elif isinstance(value, (list, tuple, set, frozenset, Mapping)):
        try: _, backref = seen[id(value)]
        except KeyError: pass
        else:
          tokens.append(f'{k}={logfmt_val(backref)}')
          continue
        seen[id(value)] = (value, '&' + k)
        if isinstance(value, Mapping): items:Iterable[tuple[Any,Any]] = sorted(value.items(), key=_str_key)
        elif isinstance(value, (set, frozenset)): items = enumerate(sorted(value, key=str)) # Sets are unordered.
        else: items = enumerate(value)
        stack.append((k, iter(items)))
        break # Descend; this iterator resumes once the child is exhausted.

      tokens.append(f'{k}={logfmt_val(value)}')
    else:
      stack.pop()
  return tokens


def format_event_string(pairs:Any) -> str:
  '''
  Format event data as a single logfmt line.
  See `logfmt_pairs` for the accepted shapes of `pairs`.
  '''
  return ' '.join(logfmt_flatten(logfmt_pairs(pairs)))


def format_event_bytes(pairs:Any) -> bytes:
  'Format event data as a single logfmt line, encoded as UTF-8.'
  return format_event_string(pairs).encode('utf-8', 'surrogatepass')


def logfmt(**kwargs:Any) -> str:
  '''
  Format a logfmt string from keyword arguments, preserving argument order.
  '''
  return ' '.join(logfmt_flatten(kwargs.items()))


# Unlike `_ident_chars`, this accepts '\', which some encoders leave unquoted.
# A bare token like `a\b=1` therefore parses as is, but the encoder never emits it: it would write `a?b=1`.
_parse_ident = r'[\x21\x23-\x3C\x3E-\x7E]+'

_bare_pair_re = re.compile(rf'({_parse_ident})=({_parse_ident})(?:\s+|\Z)')
_quoted_pair_re = re.compile(rf'({_parse_ident})="((?:[^"\\]|\\.)*)"(?:\s+|\Z)', re.DOTALL)
_junk_re = re.compile(r'(\S+)(?:\s+|\Z)')
_space_re = re.compile(r'\s*')

_unescape_re = re.compile(r'\\(?:([\\"])|([tnr])|x\{([0-9A-Fa-f]{1,5})\})')

_unescape_chars = {'t': b'\t', 'n': b'\n', 'r': b'\r'}


def logfmt_unquote(content:str) -> str:
  '''
  Reverse the escaping performed by `logfmt_quote`, given the text between the quotes.
  `\\x{hh}` escapes are bytes, and the result is decoded as UTF-8;
  values above 0xff are treated as code points.
  Unknown escape sequences are preserved as is.
  '''
  if '\\' not in content: return content
  buffer = bytearray()
  pos = 0
  for m in _unescape_re.finditer(content):
    buffer.extend(content[pos:m.start()].encode('utf-8', 'surrogatepass'))
    pos = m.end()
    quoted, char, hex_digits = m.groups()
    if quoted: buffer.extend(quoted.encode())
    elif char: buffer.extend(_unescape_chars[char])
    else:
      code = int(hex_digits, 16)
      if code <= 0xff: buffer.append(code)
      else: buffer.extend(chr(code).encode('utf-8', 'surrogatepass'))
  buffer.extend(content[pos:].encode('utf-8', 'surrogatepass'))
  try: return buffer.decode('utf-8', 'surrogatepass')
  except UnicodeDecodeError: return buffer.decode('utf-8', 'replace')


def parse_event_string(line:str|bytes) -> list[tuple[str,Any]]:
  '''
  Parse a logfmt line into a list of key/value pairs, in order of appearance.
  Duplicate keys are preserved.
  This never raises for malformed text: hunks that are not valid pairs are reported as ('junk', hunk).
  '''
  if isinstance(line, (bytes, bytearray)): line = line.decode('utf-8', 'replace')
  pairs:list[tuple[str,Any]] = []
  end = len(line)
  pos = _space_re.match(line).end() # type: ignore[union-attr]
  while pos < end:
    if m := _bare_pair_re.match(line, pos):
      pairs.append((m[1], m[2]))
    elif m := _quoted_pair_re.match(line, pos):
      pairs.append((m[1], logfmt_unquote(m[2])))
    elif m := _junk_re.match(line, pos):
      pairs.append(('junk', m[1]))
    else: # Should be unreachable, since leading space is skipped and junk matches any other character.
      pairs.append(('junk', line[pos:]))
      pairs.append(('aborted', True))
      break
    pos = m.end()
  return pairs


def parse_event_string_as_hash(line:str|bytes) -> dict[str,Any]:
  '''
  Parse a logfmt line into a dictionary.
  If a key appears more than once, the last value wins; use `parse_event_string` when that matters.
  '''
  return dict(parse_event_string(line))
