"""
CLI sub-commands.
"""
