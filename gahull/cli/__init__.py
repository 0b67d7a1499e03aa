"""
Command-line interface for GA Hull.
"""
