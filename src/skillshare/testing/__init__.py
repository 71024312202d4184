"""Test utilities for skillshare applications.

    from skillshare.testing import TestClient
"""

from skillshare.testing.client import TestClient

__all__ = ["TestClient"]
