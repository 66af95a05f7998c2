"""
Messaging utilities for the alert pipeline.

This package provides the Redis client wrapper and the cluster event
queue client.
"""
