"""
poke-fetch CLI package.

This package provides the ``poke-fetch`` command line tool built on
:class:`~poke_fetch.resolver.ResourceResolver`.
"""

from .main import cli, main

__all__ = ["cli", "main"]
