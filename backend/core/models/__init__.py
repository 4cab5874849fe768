"""
Domain models for routes and wind analysis results.
"""
