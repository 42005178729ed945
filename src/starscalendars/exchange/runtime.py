"""
starscalendars.exchange.runtime
-------------------------------
Process-wide compute-module handle.

initialize() is idempotent: the first caller loads the module while later
callers wait on the same in-flight Future. A failed load resets every piece
of singleton state so the next call starts over.
"""

from __future__ import annotations

import importlib
import logging
import threading
from concurrent.futures import Future
from typing import Optional

import numpy as np

from starscalendars import config
from starscalendars.core.errors import ErrorKind, ExchangeError

from .contract import (
    BODY_COUNT,
    COORDINATE_COUNT,
    REQUIRED_EXPORTS,
    ComputeModule,
    positions_view,
    validate_julian_day,
)

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_module: Optional[ComputeModule] = None
_pending: Optional["Future[ComputeModule]"] = None


def _load(provider, module_path: str) -> ComputeModule:
    try:
        mod = importlib.import_module(module_path)
    except ImportError as e:
        raise ExchangeError(
            ErrorKind.MODULE_NOT_FOUND,
            f"compute module '{module_path}' could not be imported: {e}",
        ) from e

    factory = getattr(mod, "load", None)
    if not callable(factory):
        raise ExchangeError(ErrorKind.INITIALIZATION_FAILED, f"'{module_path}' has no load() factory")

    try:
        module = factory(provider)
    except Exception as e:
        raise ExchangeError(ErrorKind.INITIALIZATION_FAILED, f"compute module factory failed: {e}") from e

    missing = [name for name in REQUIRED_EXPORTS if not hasattr(module, name)]
    if missing:
        raise ExchangeError(
            ErrorKind.INITIALIZATION_FAILED,
            f"compute module is missing exports: {', '.join(missing)}",
            details={"missing": missing},
        )

    if module.get_body_count() != BODY_COUNT or module.get_coordinate_count() != COORDINATE_COUNT:
        raise ExchangeError(
            ErrorKind.INITIALIZATION_FAILED,
            f"compute module layout {module.get_body_count()}x{module.get_coordinate_count()} "
            f"does not match {BODY_COUNT}x{COORDINATE_COUNT}",
        )

    # smoke test at J2000.0
    if module.compute_all(config.J2000_JD) == 0:
        raise ExchangeError(ErrorKind.INITIALIZATION_FAILED, "compute_all returned null pointer during init test")

    version = module.get_version()
    if not isinstance(version, str) or not version:
        raise ExchangeError(ErrorKind.INITIALIZATION_FAILED, "get_version returned invalid value")

    logger.info("compute module %s ready (version %s, memory %d bytes)", module_path, version, len(module.memory))
    return module


def initialize(provider=None, *, module_path: Optional[str] = None) -> ComputeModule:
    """Load the compute module once; concurrent callers share the result."""
    global _module, _pending

    with _lock:
        if _module is not None:
            return _module
        if _pending is not None:
            pending, owner = _pending, False
        else:
            pending, owner = Future(), True
            _pending = pending

    if not owner:
        return pending.result()

    try:
        module = _load(provider, module_path or config.CORE_MODULE)
    except Exception as e:
        err = e if isinstance(e, ExchangeError) else ExchangeError(
            ErrorKind.INITIALIZATION_FAILED, f"compute module check failed: {e}"
        )
        logger.error("compute module initialization failed: %s", err.message)
        with _lock:
            _module = None
            _pending = None
        pending.set_exception(err)
        if err is e:
            raise
        raise err from e
    except BaseException as e:
        # interrupted load: waiters must not block on the future forever
        logger.error("compute module initialization interrupted: %r", e)
        with _lock:
            _module = None
            _pending = None
        pending.set_exception(e)
        raise

    with _lock:
        _module = module
        _pending = None
    pending.set_result(module)
    return module


def get_module() -> Optional[ComputeModule]:
    return _module


def is_ready() -> bool:
    return _module is not None


def shutdown() -> None:
    """Drop the module handle and reset singleton state."""
    global _module, _pending
    with _lock:
        _module = None
        _pending = None
    logger.info("compute module released")


def compute_positions(jd: float, module: Optional[ComputeModule] = None) -> np.ndarray:
    """One compute_all call; returns the validated read-only view."""
    module = module if module is not None else _module
    if module is None:
        raise ExchangeError(ErrorKind.INITIALIZATION_FAILED, "compute module not initialized")
    jd = validate_julian_day(jd)
    ptr = module.compute_all(jd)
    if ptr == 0:
        raise ExchangeError(ErrorKind.COMPUTATION_FAILED, f"compute_all failed for JD {jd}", details={"julian_day": jd})
    return positions_view(module, ptr)
