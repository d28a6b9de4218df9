"""CLI package for rendering price line charts."""
