"""
API Middleware - exception handlers
"""
