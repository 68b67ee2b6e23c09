"""Top-level package for Django configuration.

Holds the settings modules for the booking engine: common settings in
``settings/base.py`` and per-environment overrides beside it.
"""
