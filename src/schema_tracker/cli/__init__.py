"""Command-line interface for schema-tracker."""
