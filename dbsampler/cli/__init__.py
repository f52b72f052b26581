"""Command line interface for dbsampler."""
