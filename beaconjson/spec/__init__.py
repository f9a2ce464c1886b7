"""Electra block body types and presets.

Note: The 'types' module must be imported after calling constants.set_preset()
to ensure SSZ types have correct sizes for the chosen preset.
"""

from . import constants

__all__ = ["constants"]
