"""ERP Access - permission resolution and role-assignment authorization."""

__version__ = "0.1.0"
