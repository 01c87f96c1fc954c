"""livescore_cms - SEO and redirect backend for the live score site."""

__version__ = "0.1.0"
