"""Mock or extend a GraphQL API from an editable IDL schema."""

__version__ = "0.1.0"
