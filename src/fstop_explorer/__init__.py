"""
fstop_explorer
================================================
Relative brightness vs. aperture, with a crop-sensor view and an exposure
preview tool. Organized as:
    optics (aperture snap + brightness model) → sensor (exposure remap)
    → scenes (image input) → utils (plotting) → widget (state)

© 2025 F-stop Explorer contributors
"""

__version__ = "0.1.0"
