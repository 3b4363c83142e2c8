"""
Sailhouse command-line interface.
"""
