"""Core expression pipeline: IR, errors, configuration and the expression language."""
