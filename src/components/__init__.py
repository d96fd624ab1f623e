"""
Display components for the glitch watch face
"""

from .console_face import ConsoleFace

__all__ = ['ConsoleFace']
