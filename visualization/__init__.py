"""Front ends for the simulation."""
