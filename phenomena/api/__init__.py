"""Phenomena HTTP API layer.

This package provides the Falcon Asynchronous Server Gateway Interface
(ASGI) application exposing the report board under ``/api``.

Usage
-----
Create the application::

    from phenomena.api import create_app

    app = create_app()              # health-only mode
    app = create_app(dependencies)  # full mode with board endpoints

"""

from phenomena.api.app import AppDependencies, create_app

__all__ = ["AppDependencies", "create_app"]
