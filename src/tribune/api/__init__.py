"""HTTP surface of the table store."""
