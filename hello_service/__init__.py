"""hello-service: hello-world API with correlation-id propagation and fail-fast config validation."""

__version__ = "1.0.0"
