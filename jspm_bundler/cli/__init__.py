"""Command-line interfaces for jspm_bundler."""
