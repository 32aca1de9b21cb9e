"""Eulerian grid operations."""
from .stencil_ops_3d import *
