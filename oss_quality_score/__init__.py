"""OSS Quality Score: composite quality scoring for open-source repositories."""

__version__ = "0.1.0"
