"""
fstop_explorer.sensor
---------------------
8-bit exposure model: RGBA bitmap container, 2^EV remap with clipping,
and the average-brightness EV estimate.
"""
