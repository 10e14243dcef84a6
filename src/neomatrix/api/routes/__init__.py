"""
API Routes - HTTP endpoint handlers

Each area (animation, frames, history, exports, playback) gets its own
router; all are included in the main FastAPI app under /api/v1.
"""
