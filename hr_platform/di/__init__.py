"""
Dependency Injection
====================

Container and providers wiring database, entity stores and services.
"""
