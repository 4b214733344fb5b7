"""
Command-line interface for tubelist.
"""
