"""provcheck: business-rule validation for provisioning request records."""

__version__ = "0.1.0"
