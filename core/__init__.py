"""
Core package - Shared service base class and calendar utilities.
"""
