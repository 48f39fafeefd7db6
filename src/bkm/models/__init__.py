"""Domain models, value objects and DTOs."""
