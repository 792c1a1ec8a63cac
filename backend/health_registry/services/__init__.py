"""Domain services sitting between the routes and the record store."""
