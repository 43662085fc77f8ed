"""
Shared pieces used by every client module:

- logging_setup: JSON log formatting for the `mbclient` logger
- config: YAML + environment settings
- types: Location and the flat API response records
- geo: Web Mercator tile/pixel transforms and Terrain-RGB decoding
"""
