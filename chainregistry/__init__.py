"""Library for a registry of chain configurations: paths, file I/O, collection, staging and a mock JSON-RPC server."""

__version__ = "0.1.0"