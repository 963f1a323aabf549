"""Blob labeling, dilation, diffusion filtering, tracking, background modelling,
camera control and polynomial Mahalanobis colour classification."""

__version__ = "0.1.0"