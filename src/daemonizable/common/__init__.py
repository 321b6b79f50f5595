"""Common utilities shared by the runloop and its CLI."""
