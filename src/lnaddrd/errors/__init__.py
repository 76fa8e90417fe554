"""Error taxonomy shared by the core and the HTTP boundary."""
