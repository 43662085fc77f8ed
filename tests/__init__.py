"""
mbclient test suite

Structure:
- unit/: offline tests; HTTP is replaced with unittest.mock
- integration/: live Mapbox API tests, skipped unless MAPBOX_TOKEN is set
"""
