"""
fstop_explorer.scenes
---------------------
Image input for the preview tool: Pillow decode/encode and synthetic targets.
"""
