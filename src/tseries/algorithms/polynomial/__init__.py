"""Homogeneous polynomials on packed multi-index tables."""
