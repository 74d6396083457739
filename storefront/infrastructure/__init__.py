"""Infrastructure: configuration, logging, storage and catalog sources."""
