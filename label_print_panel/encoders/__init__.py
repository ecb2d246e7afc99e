"""
Label Print Panel Encoders
==========================

Label command encoders for the supported printer languages.
"""

from .base import BaseEncoder
from .zpl import ZPLEncoder
from .sbpl import SBPLEncoder

__all__ = ['BaseEncoder', 'ZPLEncoder', 'SBPLEncoder', 'get_encoder']

# Encoder registry
ENCODERS = {
    'zpl': ZPLEncoder,
    'sbpl': SBPLEncoder,
}


def get_encoder(encoder_type: str) -> type:
    """Get encoder class by type."""
    return ENCODERS.get(encoder_type)
