#!/usr/bin/env python3
# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from argparse import ArgumentParser
from sys import stderr, stdin, stdout
from typing import Any, Iterable, TextIO

from slog.json import JSONDecodeError, load_jsonl, write_jsonl
from slog.logfmt import format_event_string, parse_event_string


def main() -> None:
  arg_parser = ArgumentParser(description='Convert logfmt lines to JSON lines, or JSON lines to logfmt.')
  arg_parser.add_argument('paths', nargs='*', help='input files; defaults to stdin.')
  arg_parser.add_argument('-hash', action='store_true', help='output each line as an object; later duplicate keys win.')
  arg_parser.add_argument('-format', action='store_true', help='read JSON lines (objects or pair lists) and output logfmt.')
  arg_parser.add_argument('-junk', action='store_true', help='report the number of junk hunks to stderr.')
  args = arg_parser.parse_args()

  junk_count = 0
  if not args.paths:
    junk_count = convert(stdin, format=args.format, as_hash=args.hash)
  for path in args.paths:
    try:
      with open(path) as f: junk_count += convert(f, format=args.format, as_hash=args.hash)
    except OSError as e: exit(f'logfmt: {e}')
  if args.junk and not args.format: print(f'junk: {junk_count}', file=stderr)


def convert(lines:Iterable[str], format:bool, as_hash:bool) -> int:
  if format:
    format_lines(lines, stdout)
    return 0
  return parse_lines(lines, stdout, as_hash=as_hash)


def parse_lines(lines:Iterable[str], out:TextIO, as_hash=False) -> int:
  'Parse each logfmt line and write it as a JSON line. Returns the number of junk hunks encountered.'
  junk_count = 0
  for line in lines:
    line = line.rstrip('\n')
    if not line.strip(): continue
    pairs = parse_event_string(line)
    junk_count += sum(1 for k, _ in pairs if k == 'junk')
    item:Any = dict(pairs) if as_hash else [list(p) for p in pairs]
    write_jsonl(out, item, sort=False)
  return junk_count


def format_lines(lines:Iterable[str], out:TextIO) -> None:
  'Read JSON lines and write each document as a logfmt line.'
  try:
    for doc in load_jsonl(lines):
      if isinstance(doc, list) and all(isinstance(p, list) and len(p) == 2 for p in doc):
        doc = [tuple(p) for p in doc] # Pair lists; otherwise the list is treated as alternating keys and values.
      print(format_event_string(doc), file=out)
  except JSONDecodeError as e:
    exit(f'logfmt: invalid JSON input: {e}')


if __name__ == '__main__': main()
