"""Provably fair outcome verification behind a per-game credential gate."""
