"""athame: containerized CI/CD tool wrappers and the pipelines that compose them."""

__version__ = "0.1.0"
