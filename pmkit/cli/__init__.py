"""
Command-line interface for pmkit, installed as the `pm` executable.
"""
from pmkit.cli.app import app


def main():
    app(prog_name="pm")


__all__ = ["app", "main"]
