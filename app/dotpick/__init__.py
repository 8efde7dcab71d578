"""dotpick - pick dotfiles from a repository and link them into your home."""

__version__ = "0.1.0"
