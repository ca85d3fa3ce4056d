"""Business logic services for the chatlog application."""
