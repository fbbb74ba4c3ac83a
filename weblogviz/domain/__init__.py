"""Domain layer - record index and statistics DTOs."""
