"""Version 1 routers of the internal JSON API."""
