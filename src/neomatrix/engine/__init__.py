"""
Engine - coordinate mapping, frame editing, marquee layout and playback
"""
