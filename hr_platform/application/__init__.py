"""
Application Layer
=================

Services orchestrating entity stores into business operations.
"""
