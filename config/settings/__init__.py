"""Settings package for the contest room booking project.

`base.py` contains common configuration shared across environments.
`dev.py`, `test.py` and `prod.py` extend it with environment specific
overrides.
"""
