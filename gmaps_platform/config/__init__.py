"""
Configuration and logging helpers for the Google Maps Platform client.
"""
