"""Symbol tables and the built-in symbol set."""
