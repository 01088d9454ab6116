"""
HTTP API packages.

- v1: the internal JSON API used by the tracker front end
- external: the token-authenticated issues API for external tooling
"""
