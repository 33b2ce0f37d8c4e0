"""Runtime support for compiled templates."""
