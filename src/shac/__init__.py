"""shac - compile directive-based source documents into static pages."""

__version__ = "0.3.0"
