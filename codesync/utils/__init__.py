"""
Utility helpers for codesync.
"""
