"""
Command-line interface for stdin2file.
"""
