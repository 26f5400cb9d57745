"""HTTP transport layer: FastAPI app and routers."""

__version__ = "0.1.0"
