"""Univariate and multivariate truncated series."""
