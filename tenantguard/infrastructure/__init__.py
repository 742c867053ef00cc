"""Infrastructure: persistence, security strategies and maintenance services."""
