"""Temporal force-directed visualizer for reasoning belief states."""
