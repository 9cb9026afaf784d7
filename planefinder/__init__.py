"""Near-real-time aircraft tracking with dead-reckoned interpolation."""
