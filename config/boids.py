"""Configuration for the 2D Boids arena."""

WINDOW = {
    "width": 1000,
    "height": 1000,
    "title": "Boids"
}

ARENA = {
    "display_size": 1000.0,    # Scene units spanned by the shorter window side
    "border_thickness": 50.0,
    "border_color": 0x222222ff,
    "outline_color": 0xffffffff,
}

FLOCK = {
    "count": 100,
    "max_speed": 180.0,        # Units per second
    "min_speed": 0.0,          # Optional cruise floor; 0 disables
    "max_force": 400.0,        # Cap on the summed steering acceleration

    # Flocking behavior
    "perception_radius": 60.0,   # How far boids can see neighbors
    "separation_radius": 25.0,   # "Too close" distance
    "separation_weight": 2000.0, # Push scales with 1/distance
    "alignment_weight": 0.8,     # Match neighbor velocities
    "cohesion_weight": 1.0,      # Move toward local center

    # Arena and pointer
    "border_margin": 80.0,       # Turning starts this far inside the playable edge
    "border_weight": 4000.0,     # Dominates everything else once inside the margin
    "pointer_radius": 150.0,
    "pointer_weight": 800.0,     # Positive repels, negative attracts

    "neighbor_strategy": "brute_force",  # or "grid" for large flocks

    # Drawing
    "size": 14.0,
    "color_saturation": 0.6,
    "color_value": 1.0,
}

TIMING = {
    "max_dt": 0.05,            # Cap dt to prevent physics explosion on lag
    "alpha_period_ms": 500.0,  # Flock alpha pulses as sin(t / period)
}

COLORS = {
    "background": (0x22 / 255, 0x22 / 255, 0x22 / 255, 1.0),
    "text": (0.9, 0.9, 0.9)
}
