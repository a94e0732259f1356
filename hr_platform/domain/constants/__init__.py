"""Field name and collection name constants used to build store queries."""
