"""Q361 portal package.

This package is organized by feature modules (users, access, navigation, trials, ...)
with a thin Flask controller layer and service/repository layers.
"""
