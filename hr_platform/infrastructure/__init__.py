"""
Infrastructure Layer
====================

MongoDB implementations of the domain contracts.
"""
