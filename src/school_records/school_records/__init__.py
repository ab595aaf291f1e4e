"""School Records package.

This package is organized by feature modules (records, classes, users, ...)
with a thin Flask controller layer over service/repository layers.
"""
