"""Core volume model: metadata, voxels and frame extraction."""
