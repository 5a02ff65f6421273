"""DAO implementations and the relationship adapter."""
