"""
Turn resolution and the services around it: placement and spawning, the
level/lives controller, overlay timers and audio cue mapping.
"""
