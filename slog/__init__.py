# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from .flog import flog, flog_arg, FlogError
from .global_logger import current_logger, init_logger, local_logger
from .logfmt import (format_event_bytes, format_event_string, logfmt, logfmt_key, logfmt_val, parse_event_string,
  parse_event_string_as_hash)
from .logger import LogDispatchError, Logger, LoggerConfigError, LogFatal
from .proxy import Proxy
from .values import Lazy, Rendered
