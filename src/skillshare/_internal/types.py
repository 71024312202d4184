"""Shared type aliases used across skillshare modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler — function with variable signature, sync or async
Handler: TypeAlias = Callable[..., Any]

# Zero-argument factory registered with ``App.provide()``
Provider: TypeAlias = Callable[[], Any]
