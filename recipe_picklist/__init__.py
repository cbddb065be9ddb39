"""Recipe picklist generator — recipe codes in, warehouse picklist CSV out."""

__version__ = "0.1.0"
