"""bucketwatch - version resolution for object-store backed CI resources."""

__version__ = "0.1.0"
