"""
modkit CLI commands.
"""
