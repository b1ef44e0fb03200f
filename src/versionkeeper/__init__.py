"""versionkeeper - S3 object versioning state engine."""

__version__ = "0.1.0"
