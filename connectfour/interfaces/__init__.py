"""
connectfour.interfaces - User-facing front ends for the engine
"""
