"""Client for a Raspberry Pi plant monitor."""
