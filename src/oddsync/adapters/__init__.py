"""Adapters binding the domain ports to HTTP, XML and SQL."""
