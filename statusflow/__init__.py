"""statusflow: workflow definition editing, reconciliation and export."""

__version__ = "0.1.0"
