"""Startup wiring for motionflow."""
