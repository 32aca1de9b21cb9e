from .eulerian_grid_ops import *
