"""Infrastructure layer for motionflow: observability and storage stubs."""
