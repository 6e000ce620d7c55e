"""
attrmatrix HTTP API (FastAPI).

Usage::

    from attrmatrix.api import create_app

    app = create_app()
"""

from attrmatrix.api.app import create_app

__all__ = ["create_app"]
