"""State, timing, rendering and formatting primitives."""
