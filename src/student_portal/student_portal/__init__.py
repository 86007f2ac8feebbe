"""Student Portal package.

This package is organized by feature modules (auth, dashboard, navigation, ...)
with a thin Flask controller layer over service/repository layers.
"""
