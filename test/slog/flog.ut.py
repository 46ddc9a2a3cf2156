# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from dataclasses import dataclass
from io import StringIO
from typing import Any

from slog.encode import encode_obj
from slog.flog import flog, flog_arg, FlogError
from slog.json import load_jsonl, render_json, write_jsonl
from slog.values import Lazy
from utest import utest, utest_call, utest_exc, utest_seq, utest_val


@dataclass
class Point:
  x:int
  y:str


class Slotted:
  __slots__ = ('a', 'b', '_hidden')
  def __init__(self) -> None:
    self.a = 1
    self.b = 2
    self._hidden = 3


class Plain:
  def __init__(self) -> None:
    self.x = 1
    self._private = 2


utest('hi', flog, 'hi')
utest('', flog, [])
utest('a 1 b', flog, ['a %s b', 1])
utest('x {{null}}', flog, ['x %s', None])
utest('m {{{"a":[1,2]}}}', flog, ['m %s', {'a': [1, 2]}])
utest('flag true', flog, ('flag %s', True))
utest('lazy', flog, Lazy(lambda: 'lazy'))
utest('lazy arg 7', flog, ['lazy arg %s', Lazy(lambda: 7)])
utest('{{[1,2]}}', flog, {2, 1})
utest('3.5', flog, 3.5)

utest_exc(FlogError, flog, ['%s %s', 1])
utest_exc(FlogError, flog, [1, 2])

utest('{{{"x":1,"y":"a"}}}', flog_arg, Point(1, 'a'))
utest('{{"ab"}}', flog_arg, b'ab')
utest('{{{"a":1,"b":2}}}', flog_arg, Slotted())
utest('{{{"x":1}}}', flog_arg, Plain())
utest('false', flog_arg, False)


@utest_call
def test_cycle() -> None:
  l:list[Any] = []
  l.append(l)
  utest('{{[[...]]}}', flog_arg, l)


utest('{"a":[1],"b":1}', render_json, {'b': 1, 'a': [1]})
utest('{\n  "a": 1\n}', render_json, {'a': 1}, indent=2)
utest('"é"', render_json, 'é')
utest([1, 2], encode_obj, frozenset({2, 1}))
utest('Point', encode_obj, Point)

utest_seq([{'a': 1}, [2]], load_jsonl, ['{"a":1}\n', '\n', '[2]\n'])


@utest_call
def test_write_jsonl() -> None:
  out = StringIO()
  write_jsonl(out, {'b': 1, 'a': 2}, [3])
  utest_val('{"a":2,"b":1}\n[3]\n', out.getvalue(), 'jsonl output')
  utest_exc(ValueError, write_jsonl, {'a': 1})
