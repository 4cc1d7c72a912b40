"""HTTP transport for UNO sessions."""
