"""Command-line interface for scopepack.

Example Usage
-------------
    # From command line:
    scopepack --help
    scopepack scopes --config build.yaml
    scopepack classpath --config build.yaml
    scopepack package --config build.yaml --report build/report.jsonl
"""

from .main import cli, main

__all__ = [
    "cli",
    "main",
]
