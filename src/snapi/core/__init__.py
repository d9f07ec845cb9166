"""Shared infrastructure: errors, results, configuration, runtime and logging."""
