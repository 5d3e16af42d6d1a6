"""
Carbon footprint tracker API.
"""
