"""CLI interface for pipeprocess.

This package provides command-line access to the line, whole and files
operations through registered, named directives.
"""
