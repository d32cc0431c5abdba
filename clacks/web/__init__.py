"""HTTP port for the clacks tower."""

from clacks.web.server import create_app, run_server

__all__ = ["create_app", "run_server"]
