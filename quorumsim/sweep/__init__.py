"""quorumsim.sweep

Parameter sweeps: quantity kinds, sweep strings, cross-product expansion.
"""
