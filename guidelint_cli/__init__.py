"""
Guidelint CLI

Command-line front end for the guidelint Markdown guide linter.
"""

__version__ = "0.1.0"

from guidelint_cli.config import Config, get_config, init_project

__all__ = [
    "__version__",
    "Config",
    "get_config",
    "init_project",
]
