"""Core application components."""

from .camera import RatioView
from .input_handler import InputHandler
from .application import Application

__all__ = ["RatioView", "InputHandler", "Application"]
