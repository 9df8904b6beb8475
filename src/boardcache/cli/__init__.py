"""
BoardCache command-line interface.
"""
