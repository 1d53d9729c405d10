"""
High-level use cases for the Bookshelf API.

Service modules orchestrate repositories to implement business rules;
routers call these services instead of manipulating the JSON files directly.
"""
