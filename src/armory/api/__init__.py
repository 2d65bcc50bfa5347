"""HTTP layer for the Armory query API."""
