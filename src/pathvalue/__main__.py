"""
pathvalue - `python -m pathvalue` entry point, delegating to cli.py.
"""

from .cli import cli

if __name__ == "__main__":
    cli()
