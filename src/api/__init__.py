"""
Glitch Watch Face - API Layer

Control and preview interface for the watch face running on the desktop host.
All endpoints are facades over WatchFaceService / GlitchAnimator.

Structure:
- routes/     : Endpoint handlers
- schemas/    : Pydantic schemas
- middleware/ : Error handling
"""

from api.main import create_app

__all__ = ["create_app"]
