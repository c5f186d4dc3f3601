"""
API module - REST surface of the license lifecycle.
"""
