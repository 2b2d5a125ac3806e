"""git-get — fetch one directory of a remote repository, without the .git."""

__version__ = "0.1.0"
