# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
A proxy is a child of a logger (or of another proxy) that relays messages to its parent,
adding its own prefixes and event context on the way.
Debug and muted settings fall back to the parent unless set on the proxy.
'''

from typing import Any, Union

from .logfmt import logfmt_pairs
from .logger import Logger, Prefix, prefix_list, Prefixes


class Proxy:

  def __init__(self, parent:Union[Logger,'Proxy'], *, proxy_prefix:Prefix=None, debug:bool|None=None,
   muted:bool|None=None, ctx:Any=()) -> None:
    self.parent = parent
    self.proxy_prefix = proxy_prefix
    self.ctx = logfmt_pairs(ctx)
    self._prefix:Prefix = None
    self._debug = debug
    self._muted = muted

  def __repr__(self) -> str: return f'{type(self).__name__}({self.parent!r}, proxy_prefix={self.proxy_prefix!r})'

  @property
  def logger(self) -> Logger: return self.parent.logger

  @property
  def ident(self) -> str: return self.logger.ident

  @property
  def config_id(self) -> str: return self.logger.config_id

  @property
  def events(self) -> list[dict[str,Any]]: return self.logger.events


  @property
  def prefix(self) -> Prefix: return self._prefix

  @prefix.setter
  def prefix(self, prefix:Prefix) -> None: self._prefix = prefix

  def clear_prefix(self) -> None: self._prefix = None

  @property
  def debug(self) -> bool:
    if self._debug is not None: return self._debug
    return self.parent.debug

  @debug.setter
  def debug(self, debug:bool) -> None: self._debug = bool(debug)

  def clear_debug(self) -> None: self._debug = None

  @property
  def muted(self) -> bool:
    if self._muted is not None: return self._muted
    return self.parent.muted

  @muted.setter
  def muted(self, muted:bool) -> None: self._muted = bool(muted)

  def mute(self) -> None: self._muted = True

  def unmute(self) -> None: self._muted = False

  def clear_muted(self) -> None: self._muted = None


  def log(self, *messages:Any, prefix:Prefixes=None, level='info', fatal=False) -> None:
    if self._muted and not fatal: return
    prefixes = [self.proxy_prefix, self._prefix, *prefix_list(prefix)]
    self.parent.log(*messages, prefix=prefixes, level=level, fatal=fatal)

  __call__ = log

  def info(self, *messages:Any, prefix:Prefixes=None) -> None: self.log(*messages, prefix=prefix)

  def log_fatal(self, *messages:Any, prefix:Prefixes=None) -> None:
    self.log(*messages, prefix=prefix, fatal=True)

  fatal = log_fatal

  def log_debug(self, *messages:Any, prefix:Prefixes=None) -> None:
    # Relayed through `log` so that the parent's own debug setting cannot drop the message.
    if not self.debug: return
    self.log(*messages, prefix=prefix, level='debug')


  def log_event(self, event_type:str, data:Any=(), *, ctx:Any=(), level='info') -> None:
    if self._muted: return
    self.parent.log_event(event_type, data, ctx=[*self.ctx, *logfmt_pairs(ctx)], level=level)

  def log_debug_event(self, event_type:str, data:Any=(), *, ctx:Any=()) -> None:
    if not self.debug: return
    self.log_event(event_type, data, ctx=ctx, level='debug')


  def proxy(self, *, prefix:Prefix=None, debug:bool|None=None, muted:bool|None=None, ctx:Any=()) -> 'Proxy':
    return Proxy(self, proxy_prefix=prefix, debug=debug, muted=muted, ctx=ctx)
