"""
fstop_explorer.widget
---------------------
Immutable widget state: one new record per user interaction.
"""
