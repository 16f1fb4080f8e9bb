"""Infrastructure: logging, settings and remote service transport."""
