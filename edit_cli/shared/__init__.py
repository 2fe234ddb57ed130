"""Configuration, logging, and error helpers shared by edit-data tools."""
