"""
fstop_explorer.optics
---------------------
Aperture snap rule and the inverse-square brightness model, including the
crop-sensor equivalent-aperture view.
"""
