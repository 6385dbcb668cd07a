"""
CLI commands for servicelink.
"""

from servicelink.cli.matching import match_command, normalize_command, score_command

__all__ = [
    "normalize_command",
    "score_command",
    "match_command",
]
