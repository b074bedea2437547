"""
PayDesk HR - Utilities
"""
