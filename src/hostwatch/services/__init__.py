"""Sampler, alert manager and periodic task runner."""
