"""Command line companion for the mikros framework: settings, plugins and project building blocks."""

__version__ = "0.1.0"