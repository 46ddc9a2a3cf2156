# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from collections import OrderedDict
from typing import Any

from slog.logfmt import (format_event_bytes, format_event_string, logfmt, logfmt_flatten, logfmt_key, logfmt_pairs,
  logfmt_quote, logfmt_unquote, logfmt_val, parse_event_string, parse_event_string_as_hash)
from slog.values import Lazy, Rendered
from utest import utest, utest_call, utest_items, utest_seq, utest_val


# Keys.

utest('a', logfmt_key, 'a')
utest('~', logfmt_key, '')
utest('~', logfmt_key, None)
utest('0', logfmt_key, 0)
utest('foo?bar', logfmt_key, 'foo bar')
utest('a?b?c?d', logfmt_key, 'a=b"c\\d')
utest('caf?', logfmt_key, 'café')
utest('tab?nl?', logfmt_key, 'tab\tnl\n')
utest('!#~<>', logfmt_key, '!#~<>')


# Values.

utest('x', logfmt_val, 'x')
utest('true', logfmt_val, True)
utest('false', logfmt_val, False)
utest('1', logfmt_val, 1)
utest('-1.5', logfmt_val, -1.5)
utest('""', logfmt_val, '')
utest('"a b"', logfmt_val, 'a b')
utest('"a=b"', logfmt_val, 'a=b')
utest('"a\\"b"', logfmt_val, 'a"b')
utest('"a\\\\b"', logfmt_val, 'a\\b')
utest('"tab\\there"', logfmt_val, 'tab\there')
utest('"line\\nnext\\r"', logfmt_val, 'line\nnext\r')
utest('"\\x{00}\\x{1f}\\x{7f}"', logfmt_val, '\x00\x1f\x7f')
utest('"\\x{0b}\\x{0c}"', logfmt_val, '\x0b\x0c')
utest('"\\x{c2}\\x{85}"', logfmt_val, '\x85')
utest('"\\x{e2}\\x{80}\\x{a8}\\x{e2}\\x{80}\\x{a9}"', logfmt_val, '\u2028\u2029')
utest('"zero\\x{e2}\\x{80}\\x{8b}width"', logfmt_val, 'zero\u200bwidth')
utest('"é"', logfmt_val, 'é')
utest('"\\x{ed}\\x{a0}\\x{80}"', logfmt_val, '\ud800')

utest('"\\\\\\""', logfmt_quote, '\\"')


# Pair normalization.

utest([('a', 1), ('b', 2)], logfmt_pairs, ['a', 1, 'b', 2])
utest([('a', 1), ('b', None)], logfmt_pairs, ['a', 1, 'b'])
utest([('a', 1), ('b', 2)], logfmt_pairs, [('a', 1), ('b', 2)])
utest([('a', 2), ('b', 1)], logfmt_pairs, {'b': 1, 'a': 2})
utest([], logfmt_pairs, [])
utest([('a', ('x', 'y'))], logfmt_pairs, ['a', ('x', 'y')])


# Flattening.

utest('a=1 b=two', format_event_string, ['a', 1, 'b', 'two'])
utest('a.0=x a.1=y a.2=z', format_event_string, ['a', ['x', 'y', 'z']])
utest('a.0=x a.1=y', format_event_string, ['a', ('x', 'y')])
utest('m.a=1 m.b=2', format_event_string, ['m', {'b': 2, 'a': 1}])
utest('m.a=1 m.b=2', format_event_string, ['m', OrderedDict([('b', 2), ('a', 1)])])
utest('m.1=b m.10=c m.2=a', format_event_string, ['m', {2: 'a', 1: 'b', 10: 'c'}])
utest('s.0=a s.1=b', format_event_string, ['s', {'b', 'a'}])
utest('s.0=1 s.1=10 s.2=2', format_event_string, ['s', frozenset({2, 10, 1})])
utest('~=1', format_event_string, ['', 1])
utest('foo?bar=1', format_event_string, ['foo bar', 1])
utest('k=~missing~', format_event_string, ['k', None])
utest('k=~missing~', format_event_string, ['k'])
utest('t=true f=false', format_event_string, ['t', True, 'f', False])
utest('a=1 b="two words"', format_event_string, [('a', 1), ('b', 'two words')])
utest('a=2 b=1', format_event_string, {'b': 1, 'a': 2})
utest('a=1 a=2', format_event_string, ['a', 1, 'a', 2])
utest('', format_event_string, [])
utest('x=1', format_event_string, ['e', [], 'm', {}, 'x', 1])
utest('r.l.0=1 r.l.1.x=~missing~', format_event_string, ['r', {'l': [1, {'x': None}], 'e': []}])
utest('k.?.0=1', format_event_string, ['k', {' ': [1]}])

utest('a=1 b="x y"', logfmt, a=1, b='x y')
utest(b'k="\xc3\xa9"', format_event_bytes, ['k', 'é'])

utest_seq(['p.a=1', 'p.b.0=2'], logfmt_flatten, [('a', 1), ('b', [2])], prefix='p')


# Cycles and shared references.

@utest_call
def test_cycles() -> None:
  d:dict[str,Any] = {}
  d['recurse'] = d
  utest('key.recurse=&key', format_event_string, ['key', d])

  l:list[Any] = [1]
  l.append(l)
  utest('l.0=1 l.1=&l', format_event_string, ['l', l])

  a:list[Any] = []
  b:list[Any] = [a]
  a.append(b)
  utest('a.0.0=&a', format_event_string, ['a', a])


@utest_call
def test_shared() -> None:
  s = [1, 2]
  utest('a.0=1 a.1=2 b=&a', format_event_string, ['a', s, 'b', s])
  fs = frozenset({'x'})
  utest('a.0=x b=&a', format_event_string, ['a', fs, 'b', fs])

  inner = {'z': 1}
  utest('outer.p.z=1 outer.q=&outer.p', format_event_string, ['outer', {'p': inner, 'q': inner}])

  # Equal but distinct values are not collapsed.
  utest('a.0=1 b.0=1', format_event_string, ['a', [1], 'b', [1]])

  # The seen set does not outlive a call.
  utest('a.0=1 a.1=2', format_event_string, ['a', s])
  utest('a.0=1 a.1=2', format_event_string, ['a', s])


@utest_call
def test_deep() -> None:
  depth = 5000
  root:list[Any] = []
  node = root
  for _ in range(depth):
    child:list[Any] = []
    node.append(child)
    node = child
  node.append('x')
  s = format_event_string(['d', root])
  utest_val('d' + '.0' * (depth + 1) + '=x', s, 'deep nesting')


# Lazy and rendered values.

@utest_call
def test_lazy() -> None:
  calls = []
  def produce() -> list[int]:
    calls.append(1)
    return [1, 2]
  lazy = Lazy(produce)
  utest('k.0=1 k.1=2', format_event_string, ['k', lazy])
  utest('k.0=1 k.1=2', format_event_string, ['k', lazy])
  utest_val(1, len(calls), 'lazy value is computed once')

  utest('k=~missing~', format_event_string, ['k', Lazy(lambda: None)])


utest('j=pre', format_event_string, ['j', Rendered('pre')])
utest('j="{{{\\"a\\":null,\\"b\\":[1,2]}}}"', format_event_string, ['j', Rendered({'b': [1, 2], 'a': None})])
utest('j={{null}}', format_event_string, ['j', Rendered(None)])
utest('j="{{[\\"x\\"]}}"', format_event_string, ['j', Lazy(lambda: Rendered(['x']))])


# Parsing.

utest([('a', '1'), ('b', '2')], parse_event_string, 'a=1 b=2')
utest([('a', 'x y'), ('b', '2')], parse_event_string, 'a="x y" b=2')
utest([('junk', 'stray'), ('a', '1')], parse_event_string, 'stray a=1')
utest([('a', '1'), ('a', '2')], parse_event_string, 'a=1 a=2')
utest([], parse_event_string, '')
utest([], parse_event_string, '   ')
utest([('a', '1')], parse_event_string, '  a=1  \n')
utest([('a', '')], parse_event_string, 'a=""')
utest([('junk', 'a="unterminated'), ('b', '2')], parse_event_string, 'a="unterminated b=2')
utest([('junk', 'a=')], parse_event_string, 'a=')
utest([('junk', '=1')], parse_event_string, '=1')
utest([('junk', 'a="x"y')], parse_event_string, 'a="x"y')
utest([('junk', 'a=b=c'), ('d', 'e')], parse_event_string, 'a=b=c d=e')
utest([('k', 'a\\b')], parse_event_string, 'k=a\\b')
utest([('a\\b', '1')], parse_event_string, 'a\\b=1')
utest('a?b=1', format_event_string, ['a\\b', 1])
utest([('a', '1')], parse_event_string, b'a=1')
utest([('k', 'x\\" y'), ('z', '1')], parse_event_string, 'k="x\\\\\\" y" z=1')

utest('a\\b"c\td\ne\rf', logfmt_unquote, 'a\\\\b\\"c\\td\\ne\\rf')
utest('\x00é', logfmt_unquote, '\\x{00}\\x{c3}\\x{a9}')
utest('\x00é', logfmt_unquote, '\\x{0}\\x{C3}\\x{A9}')
utest('☺', logfmt_unquote, '\\x{263a}')
utest('\ufffd', logfmt_unquote, '\\x{ff}')
utest('a\\qb', logfmt_unquote, 'a\\qb')
utest('plain', logfmt_unquote, 'plain')

utest_items([('a', '2'), ('b', '1')], parse_event_string_as_hash, 'a=1 b=1 a=2 b=1')
utest({'junk': 'y', 'a': '1'}, parse_event_string_as_hash, 'x a=1 y')


# Round trips.

for k, v in [('a', 'b'), ('x.y', '1.5'), ('&k', '&v'), ('~', '~missing~'), ('k.0', '{{null}}')]:
  utest([(k, v)], parse_event_string, format_event_string([k, v]))

for s in ['plain', '', 'a b', 'quote"', 'back\\slash', 'trailing\\', '\\"', 'x\\" y', 'tab\t', 'nl\n', 'cr\r',
 '\x00\x01\x1f\x7f', '\x85\u2028\u2029', 'é☺', '\ud800', ' leading and trailing ', 'k=v']:
  utest([('k', s)], parse_event_string, format_event_string(['k', s]))


@utest_call
def test_event_round_trip() -> None:
  shared = [1, 'two words']
  line = format_event_string(['event', 'x', 'a', shared, 'm', {'k': None}, 'b', shared])
  utest_val('event=x a.0=1 a.1="two words" m.k=~missing~ b=&a', line, 'event line')
  utest([('event', 'x'), ('a.0', '1'), ('a.1', 'two words'), ('m.k', '~missing~'), ('b', '&a')],
    parse_event_string, line)
