"""
SmartShop sandbox backend.

A small FastAPI service that serves the SmartShop contract from in-memory
state. Used for local development and by the test suite.
"""
