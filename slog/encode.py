# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from dataclasses import asdict, is_dataclass
from functools import cache, singledispatch
from typing import Any, Callable, FrozenSet, Set, Type


EncodeObj = Callable[[Any],Any]

@singledispatch
def encode_obj(obj:Any) -> Any:
  '''
  Encode an object for JSON rendering.
  This is the `default` converter used by `render_json` when flogging structured values.
  Sets are sorted by their string representations so that rendering is deterministic.
  '''

  if isinstance(obj, (set, frozenset)):
    return sorted(obj, key=str)

  try: it = iter(obj) # Try to convert to a sequence first.
  except TypeError: pass
  else: return list(it)

  if is_dataclass(obj) and not isinstance(obj, type): return asdict(obj)

  if hasattr(obj, '__slots__'):
    slots = all_slots(type(obj))
    slots = slots.union(getattr(obj, '__dict__', ())) # Slots classes may also have backing dicts.
    return {a: getattr(obj, a) for a in sorted(slots) if hasattr(obj, a)}

  try: d = obj.__dict__ # Treat other classes as dicts by default.
  except AttributeError: pass
  else:
    if any(k.startswith('_') for k in d): # Only create a new dictionary if necessary.
      return {k:v for k,v in d.items() if not k.startswith('_')}
    else:
      return d

  return str(obj) # Convert to string as last resort.


@encode_obj.register
def _(obj:bytes) -> Any: return obj.decode('utf-8', 'replace')

@encode_obj.register
def _(obj:type) -> Any: return obj.__name__


@cache
def all_slots(type:Type) -> FrozenSet[str]:
  '''
  Subclasses of slots classes may define their own slots,
  which hold just the additions to the parent class.
  Therefore we need to iterate over the inheritance chain to get all slot names.
  '''
  slots:Set[str] = set()
  for t in type.__mro__:
    try: s = t.__slots__ # type: ignore[attr-defined]
    except AttributeError: continue
    if isinstance(s, str): slots.add(s) # Single slot.
    else: slots.update(s)
  return frozenset(s for s in slots if not s.startswith('_'))
