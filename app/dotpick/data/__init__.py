"""Bundled data files for dotpick."""
