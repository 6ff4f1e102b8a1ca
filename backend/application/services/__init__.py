"""
Application services.
"""

from .phases import PhaseService

__all__ = ['PhaseService']
