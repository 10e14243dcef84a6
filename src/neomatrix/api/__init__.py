"""
HTTP API for the NeoMatrix editor (FastAPI)
"""
