# tidyimports/infra/__init__.py
"""
Infra package: logging, console output, configuration and the Result type.

Rule: no CLI imports here, so `python -m tidyimports` stays warning free.
"""
