"""Report board API resources mounted under ``/api/reports``."""
