"""voxelsculpt: parametric shapes to voxels and OBJ meshes."""

__version__ = "0.1.0"
