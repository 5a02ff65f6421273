"""Redis DAO."""
