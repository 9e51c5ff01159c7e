"""
flappy_game Package
===================

This package contains the core game logic for the Flappy arcade game:

- Actor physics (gravity, jump impulse)
- Obstacle scrolling and recycling
- Collision and pass-through scoring
- Session state machine (playing / game over / restart)

All tunable parameters are in game_config.yaml.
"""
