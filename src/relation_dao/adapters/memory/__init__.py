"""In-memory DAO."""
