"""Powers, squares and square roots of truncated series."""
