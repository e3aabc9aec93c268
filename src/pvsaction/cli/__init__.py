"""Command line interface for pvsaction."""
