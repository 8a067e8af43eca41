"""Settings package for the rental listings backend.

The `base.py` module contains common configuration shared across
environments. `dev.py`, `prod.py` and `test.py` extend it with
environment specific overrides.
"""
