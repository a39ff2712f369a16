"""
tidyimports.cli

Command modules must stay import-light: the engine and pipeline are only
imported when a command actually runs.
"""
