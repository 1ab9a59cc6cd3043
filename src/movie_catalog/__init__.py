"""Movie catalog service: CRUD over movies with OMDb import."""

__version__ = "0.1.0"
