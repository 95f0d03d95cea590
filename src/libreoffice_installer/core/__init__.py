"""Core install and upgrade services."""
