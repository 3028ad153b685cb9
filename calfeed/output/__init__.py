"""Output layer: wire formatting and the ICS writer."""
