"""Ordered route table: the first (method, template) pair that fits wins."""

from skillshare.routing.route import Route, RouteMatch
from skillshare.routing.router import Router, compile_path

__all__ = ["Route", "RouteMatch", "Router", "compile_path"]
