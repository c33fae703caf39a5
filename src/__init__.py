"""FinTrack dashboard source root."""
