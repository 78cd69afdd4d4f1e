# Invaders Source Package
"""
Invaders - fixed-timestep arcade simulation.

Modules:
- core: Geometry plus the surface, audio and scheduler interfaces
- game: Entities, formation engine, weapons, collisions and the state machine
- display: Pygame adapters for the surface, audio, scheduler and window
- utils: Configuration loading and logging
"""

__version__ = "1.0.0"
