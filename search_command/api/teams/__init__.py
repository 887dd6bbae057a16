"""
Teams Bot handlers: message commands, message extension search and selection.
"""
