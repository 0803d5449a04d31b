"""Job portal REST backend."""
