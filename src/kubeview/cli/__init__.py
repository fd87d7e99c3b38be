# src/kubeview/cli/__init__.py
"""
kubeview CLI Package

This package exposes the top-level Typer `app` so tests and the console
entrypoint can import `kubeview.cli.app`.
"""

from .main import app

__all__ = ["app"]
