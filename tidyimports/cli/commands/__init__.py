"""
tidyimports.cli.commands

One module per sub-command, each exposing register(sub).
"""
__all__ = [
    "fix_cmd",
    "check_cmd",
]
