"""Command line tools for gcfg files."""
