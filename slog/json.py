# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

import json as _json
from json.decoder import JSONDecodeError
from typing import Any, Iterable, Iterator, Optional, TextIO, Tuple

from .encode import EncodeObj, encode_obj


JSONDecodeError = JSONDecodeError

_Seps = Optional[Tuple[str,str]]


def render_json(item:Any, default:EncodeObj=encode_obj, sort=True, indent:int|None=None, separators:_Seps|None=None, **kwargs) -> str:
  'Render `item` as a json string. Unlike `json.dumps`, the output is compact by default.'
  if not separators:
    separators = (',', ': ') if indent else (',', ':')
  return _json.dumps(item, indent=indent, default=default, sort_keys=sort, separators=separators, ensure_ascii=False, **kwargs)


def write_jsonl(file:TextIO, *items:Any, default:EncodeObj=encode_obj, sort=True, flush=False, **kwargs) -> None:
  'Write each item in `items` as jsonl to file.'
  try: write = file.write # If the `file` argument was omitted, the first `item` may have taken its place.
  except AttributeError as e:
    raise ValueError('`file` (first) argument does not have a `write` attribute; was the file omitted from the call?') from e
  for item in items:
    write(render_json(item, default=default, sort=sort, **kwargs))
    write('\n')
    if flush: file.flush()


def load_jsonl(stream:Iterable[str]) -> Iterator[Any]:
  'Parse each nonblank line of `stream` as a json document.'
  for line in stream:
    if line.strip(): yield _json.loads(line)
