"""Public API surface for the local HTTP server and the GUI."""

from __future__ import annotations

from .registry import ApiFunction, call_api, get_api_functions, register_api
from .state import ApiState, api_state

# Import endpoints so decorators run at module import time.
from . import endpoints  # noqa: F401

__all__ = ["ApiFunction", "ApiState", "api_state", "call_api", "get_api_functions", "register_api"]
