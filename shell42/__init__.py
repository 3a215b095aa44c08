"""A small interactive command shell with pipes, redirections, aliases and history."""

__version__ = "0.1.0"