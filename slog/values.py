# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Wrapper types that give special meaning to values passed to the logfmt encoder and the flogger.
'''

from typing import Any, Callable


class Lazy:
  '''
  A deferred value: `fn` is called with no arguments the first time the value is needed.
  The result is cached, so the function runs at most once no matter how many times the value is rendered.
  '''

  __slots__ = ('fn', '_val', '_done')

  def __init__(self, fn:Callable[[],Any]) -> None:
    self.fn = fn
    self._val:Any = None
    self._done = False

  def __repr__(self) -> str: return f'{type(self).__name__}({self.fn!r})'

  def __call__(self) -> Any:
    if not self._done:
      self._val = self.fn()
      self._done = True
    return self._val


class Rendered:
  '''
  Wrap a value to have the encoder render it as a single flogged scalar
  instead of flattening it into dotted keys.
  Use this to embed a JSON dump of a structure in a logfmt line.
  '''

  __slots__ = ('val',)

  def __init__(self, val:Any) -> None:
    self.val = val

  def __repr__(self) -> str: return f'{type(self).__name__}({self.val!r})'

  def __eq__(self, other:Any) -> bool:
    return isinstance(other, Rendered) and self.val == other.val

