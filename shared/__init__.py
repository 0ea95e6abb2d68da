"""
Shared Kernel

Building blocks used by more than one app: the error taxonomy that
services raise and the API layer renders.
"""
