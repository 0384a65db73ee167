"""Fitness Trainer: workout tracking API and client."""

__version__ = "0.1.0"
