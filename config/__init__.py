"""Top-level package for Django configuration.

This package holds the settings modules for the different environments
and the WSGI/ASGI entry points of the contest room booking service.
"""
