"""
bfc Command-Line Interface
==========================

This package provides the ``bfc`` command-line tool, a Click-based
application that reads a program (and then its input) from standard
input, runs it, and writes the program's output to standard output.
"""

__all__ = ["bfc"]
