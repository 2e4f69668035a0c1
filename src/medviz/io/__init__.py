"""File input and frame output adapters."""
