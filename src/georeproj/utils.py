"""
utils.py

Small logging helpers shared by the converter adapter and the transform
facade.

The public helpers:
- `safe_log_exception(msg, exc, level=logging.ERROR, **ctx)` : logs an
  exception with context, falling back to stderr if logging fails
- `describe(geom)` : short label for a geometry value in log records

"""

from typing import Any
import sys
import logging

import numpy as np

logger = logging.getLogger(__name__)


def safe_log_exception(msg: str, exc: BaseException, level: int = logging.ERROR, **ctx: Any) -> None:
	"""Log an exception robustly.

	Attempts to call `logger.log` with the exception attached. If logging
	fails for any reason, falls back to writing a compact message to
	`sys.stderr`.
	"""
	try:
		if ctx:
			ctx_s = ' | '.join(f"{k}={v!r}" for k, v in ctx.items())
			logger.log(level, '%s | %s | %s', msg, exc, ctx_s, exc_info=exc)
		else:
			logger.log(level, '%s | %s', msg, exc, exc_info=exc)
	except Exception:
		# Minimal fallback: write a compact failure message to stderr.
		try:
			sys.stderr.write(f'LOGGING FAILURE: {msg} {exc}\n')
		except Exception:
			pass


def describe(geom: Any) -> str:
	"""Return a short label for ``geom`` such as ``Polygon`` or ``ndarray(3, 2)[float64]``."""
	if isinstance(geom, np.ndarray):
		return f"ndarray{geom.shape}[{geom.dtype}]"
	geom_type = getattr(geom, 'geom_type', None)
	if geom_type is not None:
		return geom_type
	return type(geom).__name__
