"""Gameplay and tuning constants.

Values are per tick (one frame at the target frame rate) unless noted.
"""

# Window / loop
WINDOW_SIZE = (800, 600)
TARGET_FPS = 60
WINDOW_TITLE = "gamekit demo"

# Physics
GRAVITY_ACCEL = 0.4  # added to vy every tick (positive down)
SETTLE_GRAVITY_TICKS = 2.5  # see collision.settle_speed
BALL_RADIUS = 12.0
BALL_RESTITUTION = 0.8  # fraction of speed kept on a bounce
PLAYER_SIZE = (64.0, 16.0)
PLAYER_SPEED = 6.0
PLAYER_GROUND_OFFSET = 40.0  # distance from the bottom edge to the paddle top

# Particles
PARTICLE_RADIUS = 3.0
PARTICLE_LIFE_FRAMES = 45
PARTICLE_ALPHA = 255.0
PARTICLE_FADE = 6.0  # alpha lost per tick
PARTICLE_SPEED_MAX = 4.0
PARTICLE_GRAVITY = 0.05
BURST_COUNT_POINTER = 24  # particles spawned per pointer press
BURST_COUNT_IMPACT = 8  # particles spawned when the ball hits something
MAX_PARTICLES = 2000

# Colors
BACKGROUND_COLOR = (18, 18, 28)
PLAYER_COLOR = (90, 170, 240)
BALL_COLOR = (240, 200, 80)
PARTICLE_COLOR = (255, 140, 60)
OBSTACLE_COLOR = (120, 120, 140)
TEXT_COLOR = (235, 235, 235)

__all__ = [name for name in globals().keys() if name.isupper()]
