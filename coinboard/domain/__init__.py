"""Domain entities, lifecycle transitions and the authorization gate."""
