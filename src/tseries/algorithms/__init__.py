"""Series containers and the power, square and square-root algorithms."""
