"""Runtime components: REST runner, collection pagination and rate-limited deletion."""
