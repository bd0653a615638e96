"""Core infrastructure for devclean: theme and the event reporter."""
